from .checklists import ChecklistStore, SqlChecklistStore
from .templates import SqlTemplateStore, TemplateStore
from .users import SqlUserStore, UserStore

__all__ = [
    "ChecklistStore",
    "SqlChecklistStore",
    "SqlTemplateStore",
    "SqlUserStore",
    "TemplateStore",
    "UserStore",
]
