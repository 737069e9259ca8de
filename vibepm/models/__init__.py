from .project import Project
from .task import Task
from .prompt import Prompt
from .step import Step
from .activity import Activity
from .quick_capture import QuickCapture
from .settings import AppSetting
from .context_document import ContextDocument
from .phase import Phase, Decision
