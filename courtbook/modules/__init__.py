"""Domain modules package."""

from courtbook.modules.booking import models as booking_models  # noqa: F401
from courtbook.modules.identity import models as identity_models  # noqa: F401
from courtbook.modules.scheduling import models as scheduling_models  # noqa: F401
from courtbook.modules.venues import models as venues_models  # noqa: F401
