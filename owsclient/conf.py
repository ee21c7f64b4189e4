from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver

from owsclient import __version__

_originals = {}

# -- CSW protocol

# The CSW protocol version that GetRecords requests are sent with.
OWSCLIENT_CSW_VERSION = getattr(settings, "OWSCLIENT_CSW_VERSION", "2.0.2")

# The metadata schema the records should be returned in (ISO 19139 by default).
OWSCLIENT_CSW_OUTPUT_SCHEMA = getattr(
    settings, "OWSCLIENT_CSW_OUTPUT_SCHEMA", "http://www.isotc211.org/2005/gmd"
)

# Which part of each record should be returned ("brief", "summary" or "full").
OWSCLIENT_CSW_ELEMENT_SET_NAME = getattr(settings, "OWSCLIENT_CSW_ELEMENT_SET_NAME", "full")

# The Filter Encoding version of the <csw:Constraint>.
# PyCSW rejects this parameter in GET requests, hence it's only sent to other providers.
OWSCLIENT_CONSTRAINT_LANGUAGE_VERSION = getattr(
    settings, "OWSCLIENT_CONSTRAINT_LANGUAGE_VERSION", "1.1.0"
)

# Which dialect a CSW endpoint speaks, as {service_url: "PyCSW"}.
# Endpoints that are not listed here use the default OGC dialect.
OWSCLIENT_PROVIDER_TYPES = getattr(settings, "OWSCLIENT_PROVIDER_TYPES", {})

# -- SOS protocol

# The SOS protocol version that requests are sent with.
OWSCLIENT_SOS_VERSION = getattr(settings, "OWSCLIENT_SOS_VERSION", "2.0.0")

# -- transport

# Seconds to wait for the server, None waits forever.
OWSCLIENT_REQUEST_TIMEOUT = getattr(settings, "OWSCLIENT_REQUEST_TIMEOUT", None)

# The User-Agent header that is sent to the remote servers.
OWSCLIENT_USER_AGENT = getattr(
    settings, "OWSCLIENT_USER_AGENT", f"django-owsclient/{__version__}"
)


@receiver(setting_changed)
def _on_settings_change(setting, value, enter, **kwargs):
    if not setting.startswith("OWSCLIENT_"):
        return

    conf_module = globals()
    if value is None and not enter:
        # override_settings().disable() returns what the django settings module had.
        # Revert to our defaults here instead.
        value = _originals.get(setting)
    else:
        # Track defaults of this file for reverting to them
        _originals.setdefault(setting, conf_module[setting])

    conf_module[setting] = value
