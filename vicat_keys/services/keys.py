"""Redeem code and key lifecycle - business logic layer.

Redeem codes move ``unredeemed -> redeemed`` exactly once and may only be
deleted before that. Keys move ``active -> blacklisted`` and never back.
"""

from __future__ import annotations

from vicat_keys.core import identifiers
from vicat_keys.core.exceptions import ConflictError, ErrorCode, NotFoundError, ValidationError
from vicat_keys.core.logging import get_logger
from vicat_keys.core.models import (
    KEY_STATUS_ACTIVE,
    MAX_REDEEM_BATCH,
    ActiveKey,
    BlacklistEntry,
    KeyInfo,
    KeyListing,
    KeyVerdict,
    RedeemCode,
    utc_now,
)
from vicat_keys.core.ports import Clock
from vicat_keys.services.state import StateGateway

logger = get_logger(__name__)


class KeyLifecycleService:
    """Issue redeem codes, exchange them for keys, and revoke keys."""

    def __init__(self, gateway: StateGateway, clock: Clock = utc_now) -> None:
        self._gateway = gateway
        self._clock = clock

    def issue_redeem_codes(self, count: object) -> list[str]:
        """Create ``count`` new redeem codes and return them in plaintext.

        Codes are not checked against existing ones; at 36**12 combinations a
        collision is treated as negligible.

        Raises:
            ValidationError: If ``count`` is not a whole number in 1..100.
        """
        if isinstance(count, float) and count.is_integer():
            count = int(count)
        if (
            not isinstance(count, int)
            or isinstance(count, bool)
            or not 1 <= count <= MAX_REDEEM_BATCH
        ):
            raise ValidationError(
                ErrorCode.INVALID_COUNT,
                f"Count must be a number between 1 and {MAX_REDEEM_BATCH}",
            )

        codes = [identifiers.generate_redeem_code() for _ in range(count)]
        with self._gateway.transaction() as document:
            for code in codes:
                document.redeem_codes.append(RedeemCode(code=code, created_at=self._clock()))
        logger.info("Issued redeem codes", extra={"count": count})
        return codes

    def redeem(self, code: str | None, user_id: str) -> str:
        """Exchange a redeem code for a new key owned by ``user_id``.

        The code update, the new active key, and the user's key list are
        written together in one save.

        Raises:
            ValidationError: If ``code`` is empty.
            NotFoundError: If the code does not exist.
            ConflictError: If the code was already redeemed.
        """
        if not code:
            raise ValidationError(ErrorCode.MISSING_FIELDS, "Redeem code is required")

        with self._gateway.transaction() as document:
            redeem_code = document.find_redeem_code(code)
            if redeem_code is None:
                raise NotFoundError(ErrorCode.CODE_NOT_FOUND, "Invalid redeem code")
            if redeem_code.redeemed:
                raise ConflictError(ErrorCode.CODE_ALREADY_USED, "Redeem code already used")

            new_key = identifiers.generate_vicat_key()
            now = self._clock()

            redeem_code.redeemed = True
            redeem_code.redeemed_by = user_id
            redeem_code.redeemed_at = now

            document.active_keys.append(
                ActiveKey(key=new_key, user_id=user_id, created_at=now, status=KEY_STATUS_ACTIVE)
            )
            user = document.find_user(user_id)
            if user is not None:
                user.keys.append(new_key)

        logger.info("Redeem code exchanged for key", extra={"user_id": user_id})
        return new_key

    def delete_redeem_code(self, code: str) -> None:
        """Delete a redeem code that has not been redeemed yet.

        Raises:
            NotFoundError: If the code does not exist.
            ConflictError: If the code was already redeemed.
        """
        with self._gateway.transaction() as document:
            redeem_code = document.find_redeem_code(code)
            if redeem_code is None:
                raise NotFoundError(ErrorCode.CODE_NOT_FOUND, "Redeem code not found")
            if redeem_code.redeemed:
                raise ConflictError(
                    ErrorCode.CODE_ALREADY_REDEEMED, "Cannot delete redeemed code"
                )
            document.redeem_codes.remove(redeem_code)

    def blacklist_key(self, key: str | None) -> None:
        """Permanently deny ``key`` and drop it from the active set.

        Keys that were never issued may be blacklisted ahead of time.

        Raises:
            ValidationError: If ``key`` is empty.
            ConflictError: If the key is already blacklisted.
        """
        if not key:
            raise ValidationError(ErrorCode.MISSING_FIELDS, "Key is required")

        with self._gateway.transaction() as document:
            if document.is_blacklisted(key):
                raise ConflictError(ErrorCode.ALREADY_BLACKLISTED, "Key is already blacklisted")
            document.blacklist.append(BlacklistEntry(key=key, blacklisted_at=self._clock()))
            document.active_keys = [k for k in document.active_keys if k.key != key]
        logger.info("Key blacklisted", extra={"key_prefix": key[:10]})

    def check_key(self, key: str | None) -> KeyVerdict:
        """Return whether ``key`` may be used.

        The blacklist is consulted before the active set so that a key present
        in both is always denied.
        """
        if not key:
            raise ValidationError(ErrorCode.MISSING_FIELDS, "Key is required")

        document = self._gateway.snapshot()
        if document.is_blacklisted(key):
            return KeyVerdict(status="denied", reason="blacklisted", message="Key is blacklisted")

        active = document.find_active_key(key)
        if active is not None and active.status == KEY_STATUS_ACTIVE:
            return KeyVerdict(status="ok", message="Key is valid")
        return KeyVerdict(status="denied", reason="invalid", message="Invalid key")

    def list_user_keys(self, user_id: str) -> list[KeyInfo]:
        """Return the active keys owned by ``user_id``."""
        document = self._gateway.snapshot()
        return [
            KeyInfo(key=k.key, created_at=k.created_at, status=k.status)
            for k in document.active_keys
            if k.user_id == user_id
        ]

    def list_all_keys(self) -> KeyListing:
        """Return every active key and every blacklist entry."""
        document = self._gateway.snapshot()
        return KeyListing(keys=document.active_keys, blacklist=document.blacklist)

    def list_redeem_codes(self) -> list[RedeemCode]:
        """Return every redeem code, redeemed or not."""
        return self._gateway.snapshot().redeem_codes


__all__ = ["KeyLifecycleService"]
