from .preferences_api import PreferencesApiImpl  # noqa: F401
from .resource_access_api import ResourceAccessApiImpl  # noqa: F401
from .credentials_api import CredentialsApiImpl  # noqa: F401
from .groups_api import GroupsApiImpl  # noqa: F401
