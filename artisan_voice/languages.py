"""
Language tables for the registration wizard.
Questions and UI labels per language tag, with an English (India) fallback.
"""

from typing import Dict, List, Optional

FALLBACK_LANGUAGE = "en-IN"

_ENGLISH_QUESTIONS = [
    "What is your name?",
    "Where do you live?",
    "What do you make or create?",
    "Your phone number? You can skip this.",
    "What is your email address? For example, say 'john at gmail dot com'.",
    "Please create a secure password for your account.",
    "For security, please say your password again to confirm.",
]

QUESTIONS: Dict[str, List[str]] = {
    "en-US": _ENGLISH_QUESTIONS,
    "en-IN": _ENGLISH_QUESTIONS,
    "hi-IN": [
        "आपका नाम क्या है?",
        "आप कहाँ रहते हैं?",
        "आप क्या बनाते हैं?",
        "आपका फोन नंबर? आप इसे छोड़ सकते हैं।",
        "आपका ईमेल पता क्या है? उदाहरण के लिए कहें 'john at gmail dot com'।",
        "कृपया अपने खाते के लिए एक सुरक्षित पासवर्ड बनाएं।",
        "सुरक्षा के लिए, कृपया पुष्टि के लिए अपना पासवर्ड फिर से कहें।",
    ],
    "mr-IN": [
        "तुमचे नाव काय आहे?",
        "तुम्ही कुठे राहता?",
        "तुम्ही काय बनवता?",
        "तुमचा फोन नंबर? तुम्ही हे वगळू शकता।",
        "तुमचा ईमेल पत्ता काय आहे? उदाहरणार्थ 'john at gmail dot com' म्हणा।",
        "कृपया तुमच्या खात्यासाठी एक सुरक्षित पासवर्ड तयार करा।",
        "सुरक्षिततेसाठी, कृपया पुष्टीसाठी तुमचा पासवर्ड पुन्हा सांगा।",
    ],
    "es-ES": [
        "¿Cuál es tu nombre?",
        "¿Dónde vives?",
        "¿Qué haces o creas?",
        "¿Tu número de teléfono? Puedes omitir esto.",
        "¿Cuál es tu dirección de correo electrónico? Por ejemplo, di 'john arroba gmail punto com'.",
        "Por favor, crea una contraseña segura para tu cuenta.",
        "Por seguridad, repite tu contraseña para confirmar.",
    ],
    "fr-FR": [
        "Quel est votre nom?",
        "Où habitez-vous?",
        "Qu'est-ce que vous fabriquez ou créez?",
        "Votre numéro de téléphone? Vous pouvez l'ignorer.",
        "Quelle est votre adresse e-mail? Par exemple, dites 'john arobase gmail point com'.",
        "Veuillez créer un mot de passe sécurisé pour votre compte.",
        "Pour la sécurité, répétez votre mot de passe pour confirmer.",
    ],
}

_ENGLISH_UI = {
    "title": "AI Voice Assistant",
    "subtitle": "Artisan Registration",
    "description": "Speak naturally in your preferred language to create your beautiful artisan profile",
    "start": "Start Voice Registration",
    "stop": "Stop Recording",
    "confirm": "Confirm & Save Profile",
    "edit": "Edit Answer",
    "restart": "Start Over",
}

UI_TEXT: Dict[str, Dict[str, str]] = {
    "en-US": _ENGLISH_UI,
    "en-IN": _ENGLISH_UI,
    "hi-IN": {
        "title": "एआई वॉयस असिस्टेंट",
        "subtitle": "कारीगर पंजीकरण",
        "description": "अपनी सुंदर कारीगर प्रोफ़ाइल बनाने के लिए अपनी पसंदीदा भाषा में स्वाभाविक रूप से बोलें",
        "start": "वॉयस पंजीकरण शुरू करें",
        "stop": "रिकॉर्डिंग बंद करें",
        "confirm": "पुष्टि करें और प्रोफ़ाइल सेव करें",
        "edit": "उत्तर संपादित करें",
        "restart": "फिर से शुरू करें",
    },
    "mr-IN": {
        "title": "एआय व्हॉईस असिस्टंट",
        "subtitle": "कारागीर नोंदणी",
        "description": "तुमची सुंदर कारागीर प्रोफाइल तयार करण्यासाठी तुमच्या आवडत्या भाषेत नैसर्गिकपणे बोला",
        "start": "व्हॉईस नोंदणी सुरू करा",
        "stop": "रेकॉर्डिंग थांबवा",
        "confirm": "पुष्टी करा आणि प्रोफाइल जतन करा",
        "edit": "उत्तर संपादित करा",
        "restart": "पुन्हा सुरू करा",
    },
    "es-ES": {
        "title": "Asistente de Voz IA",
        "subtitle": "Registro de Artesano",
        "description": "Habla naturalmente en tu idioma preferido para crear tu hermoso perfil de artesano",
        "start": "Iniciar Registro por Voz",
        "stop": "Detener Grabación",
        "confirm": "Confirmar y Guardar Perfil",
        "edit": "Editar Respuesta",
        "restart": "Empezar de Nuevo",
    },
    "fr-FR": {
        "title": "Assistant Vocal IA",
        "subtitle": "Inscription Artisan",
        "description": "Parlez naturellement dans votre langue préférée pour créer votre beau profil d'artisan",
        "start": "Commencer l'Inscription Vocale",
        "stop": "Arrêter l'Enregistrement",
        "confirm": "Confirmer et Sauvegarder le Profil",
        "edit": "Modifier la Réponse",
        "restart": "Recommencer",
    },
}

# Tags offered by the language selector (recognition/synthesis language).
LANGUAGES = [
    ("en-US", "English (US)"),
    ("en-IN", "English (India)"),
    ("hi-IN", "हिंदी (Hindi)"),
    ("mr-IN", "मराठी (Marathi)"),
    ("ta-IN", "தமிழ் (Tamil)"),
    ("te-IN", "తెలుగు (Telugu)"),
    ("bn-IN", "বাংলা (Bengali)"),
    ("gu-IN", "ગુજરાતી (Gujarati)"),
    ("kn-IN", "ಕನ್ನಡ (Kannada)"),
    ("pa-IN", "ਪੰਜਾਬੀ (Punjabi)"),
    ("es-ES", "Español (Spanish)"),
    ("fr-FR", "Français (French)"),
    ("de-DE", "Deutsch (German)"),
    ("it-IT", "Italiano (Italian)"),
    ("pt-BR", "Português (Portuguese)"),
    ("ar-SA", "العربية (Arabic)"),
    ("zh-CN", "中文 (Chinese)"),
    ("ja-JP", "日本語 (Japanese)"),
    ("ko-KR", "한국어 (Korean)"),
    ("ru-RU", "Русский (Russian)"),
]


def is_supported_language(tag: str) -> bool:
    return any(code == tag for code, _ in LANGUAGES)


def get_questions(language: str) -> List[str]:
    """Questions for `language`, falling back to English (India)."""
    return QUESTIONS.get(language) or QUESTIONS[FALLBACK_LANGUAGE]


def get_ui_text(language: str) -> Dict[str, str]:
    return UI_TEXT.get(language) or UI_TEXT[FALLBACK_LANGUAGE]


def primary_subtag(tag: str) -> str:
    """'hi-IN' -> 'hi'."""
    return (tag or "").replace("_", "-").split("-")[0].lower()


def _voice_languages(voice) -> List[str]:
    # pyttsx3 drivers report languages as str or bytes (espeak prefixes a priority byte)
    out = []
    for lang in getattr(voice, "languages", None) or []:
        if isinstance(lang, bytes):
            lang = lang.decode("utf-8", errors="ignore").lstrip("\x00\x01\x02\x03\x04\x05")
        out.append(str(lang).replace("_", "-").lower())
    return out


def pick_voice(voices, language: str) -> Optional[object]:
    """
    Choose a synthesis voice for `language`.
    Prefers a voice advertising the primary subtag in its languages,
    then one whose id mentions it. Returns None if nothing matches.
    """
    primary = primary_subtag(language)
    if not primary:
        return None
    voices = list(voices or [])

    for v in voices:
        if any(lang.split("-")[0] == primary for lang in _voice_languages(v)):
            return v

    for v in voices:
        vid = str(getattr(v, "id", "")).lower().replace("_", "-")
        parts = vid.replace("\\", "/").replace(".", "/").split("/")
        if any(p == primary or p.startswith(primary + "-") for p in parts):
            return v
    return None
