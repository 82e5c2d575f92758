# spotfinder/services/consent_service.py
"""
"Has this reporter opted into data collection?" lives in the user-profile
store, which this API does not own. Routes depend on get_consent_provider();
deployments that have a profile service override that dependency.
"""

from typing import Iterable, Optional, Protocol

from spotfinder.config import settings


class ConsentProvider(Protocol):
    def has_reporting_consent(self, subject_id: str) -> bool: ...


class SettingsConsentProvider:
    """Consent from configuration: a default answer plus an opt-out list."""

    def __init__(self, default: Optional[bool] = None, denylist: Optional[Iterable[str]] = None):
        self.default = settings.REPORTING_CONSENT_DEFAULT if default is None else default
        self.denylist = set(settings.REPORTING_CONSENT_DENYLIST if denylist is None else denylist)

    def has_reporting_consent(self, subject_id: str) -> bool:
        if subject_id in self.denylist:
            return False
        return self.default


def get_consent_provider() -> ConsentProvider:
    return SettingsConsentProvider()
