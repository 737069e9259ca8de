# vibepm/core/exceptions.py

class BaseAppException(Exception):
    """Базовый класс для всех кастомных исключений приложения."""
    def __init__(self, message: str = "App exception"):
        super().__init__(message)

# ==== Валидация ====

class ValidationError(BaseAppException):
    """Общая ошибка валидации."""
    def __init__(self, message: str = "Validation error"):
        super().__init__(message)

class ProjectValidationError(ValidationError):
    """Ошибка валидации проекта."""
    def __init__(self, message: str = "Project validation error"):
        super().__init__(message)

class TaskValidationError(ValidationError):
    """Ошибка валидации задачи."""
    def __init__(self, message: str = "Task validation error"):
        super().__init__(message)

class StepValidationError(ValidationError):
    """Ошибка валидации шага задачи."""
    def __init__(self, message: str = "Step validation error"):
        super().__init__(message)

class PromptValidationError(ValidationError):
    """Ошибка валидации промпта."""
    def __init__(self, message: str = "Prompt validation error"):
        super().__init__(message)

class CaptureValidationError(ValidationError):
    """Ошибка валидации Quick Capture."""
    def __init__(self, message: str = "Capture validation error"):
        super().__init__(message)

class ActivityValidationError(ValidationError):
    """Ошибка валидации записи активности."""
    def __init__(self, message: str = "Activity validation error"):
        super().__init__(message)

class SettingValidationError(ValidationError):
    """Ошибка валидации настройки."""
    def __init__(self, message: str = "Setting validation error"):
        super().__init__(message)

class BoardDropRejected(ValidationError):
    """Перетаскивание карточки в колонку не разрешено правилами доски."""
    def __init__(self, message: str = "Drop is not allowed"):
        super().__init__(message)

# ==== NotFound ====

class NotFoundError(BaseAppException):
    """Ошибка отсутствия ресурса."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)

class ProjectNotFound(NotFoundError):
    """Ошибка: проект не найден."""
    def __init__(self, message: str = "Project not found"):
        super().__init__(message)

class TaskNotFound(NotFoundError):
    """Ошибка: задача не найдена."""
    def __init__(self, message: str = "Task not found"):
        super().__init__(message)

class StepNotFound(NotFoundError):
    """Ошибка: шаг не найден."""
    def __init__(self, message: str = "Step not found"):
        super().__init__(message)

class PromptNotFound(NotFoundError):
    """Ошибка: промпт не найден."""
    def __init__(self, message: str = "Prompt not found"):
        super().__init__(message)

class CaptureNotFound(NotFoundError):
    """Ошибка: Quick Capture не найден."""
    def __init__(self, message: str = "Capture not found"):
        super().__init__(message)

# ==== AI ====

class AIConfigurationError(BaseAppException):
    """Не найден API-ключ ни в настройках, ни в окружении."""
    def __init__(self, message: str = "AI API key not configured"):
        super().__init__(message)

class AIProviderError(BaseAppException):
    """Ошибка ответа upstream AI-провайдера (не-2xx, сеть, неожиданный формат)."""
    def __init__(self, message: str = "AI provider error", status_code: int = None):
        super().__init__(message)
        self.status_code = status_code
