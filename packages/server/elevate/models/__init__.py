# SQLModel definitions, imported here so table metadata is populated.
from .base import AuditMixin, TimestampMixin  # noqa: F401
from .employee import Employee  # noqa: F401
from .organization import Organization  # noqa: F401
from .art import Art  # noqa: F401
from .team import Team  # noqa: F401
from .owner_links import EmployeeArt, EmployeeOrg, EmployeeTeam  # noqa: F401
