ERR_CONFIGURATION = "CONFIGURATION_ERROR"
ERR_CAMERA_ACCESS = "CAMERA_ACCESS_ERROR"
ERR_CAMERA_PERMISSION = "CAMERA_PERMISSION_DENIED"
ERR_TRANSLATION = "TRANSLATION_ERROR"
ERR_SUMMARIZATION = "SUMMARIZATION_ERROR"
ERR_BUSY = "BUSY"
ERR_UNKNOWN = "UNKNOWN"


class SessionError(Exception):
    """Base for errors surfaced to the user. Carries a stable code + readable message."""
    code = ERR_UNKNOWN
    default_message = "Terjadi kesalahan."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(SessionError):
    code = ERR_CONFIGURATION
    default_message = "Kunci API Gemini tidak ditemukan. Harap atur variabel lingkungan API_KEY."


class CameraAccessError(SessionError):
    code = ERR_CAMERA_ACCESS
    default_message = "Gagal mengakses kamera."


class CameraPermissionError(CameraAccessError):
    code = ERR_CAMERA_PERMISSION
    default_message = "Izin kamera ditolak. Harap izinkan akses kamera di pengaturan browser Anda."


class TranslationError(SessionError):
    code = ERR_TRANSLATION
    default_message = "Gagal menerjemahkan. Silakan coba lagi."


class SummarizationError(SessionError):
    code = ERR_SUMMARIZATION
    default_message = "Gagal membuat kesimpulan. Silakan coba lagi."


class GatewayError(Exception):
    """Raised by gateway adapters when the inference service call fails."""
