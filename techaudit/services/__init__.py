from .audit_proxy import AuditProxy, resolve_strategy, require_url
from .lighthouse import LighthouseResult, dig
from .pagespeed_client import PageSpeedClient
