"""Domain modules package."""

from school_api.modules.lessons import models as lessons_models  # noqa: F401
from school_api.modules.students import models as students_models  # noqa: F401
