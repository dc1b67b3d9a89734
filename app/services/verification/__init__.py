"""Verification services - remote domain checks with token and result caching."""

from app.services.verification.cache import TTLCache
from app.services.verification.checks import check_spamhaus, check_wayback
from app.services.verification.credentials import CredentialManager
from app.services.verification.normalize import normalize_domain
from app.services.verification.service import VerificationService

__all__ = [
    "CredentialManager",
    "TTLCache",
    "VerificationService",
    "check_spamhaus",
    "check_wayback",
    "normalize_domain",
]
