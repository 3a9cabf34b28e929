"""
⚠️ DRAFT — requires crypto review before production use

Proof engine: prove and verify keyed-commitment statements.

Every predicate goes through the same path:

    prove:  validate -> predicate holds -> salt -> MAC(canonical + salt)
    verify: MAC(canonical + salt) == proof  AND  predicate holds

The verifier learns the revealed attribute; nothing is hidden at
verification time. Salt reuse and proof replay are not prevented: proofs
carry no nonce or expiry.
"""

from __future__ import annotations

import base64
import binascii
import logging
from datetime import date, datetime, timezone
from typing import Callable, Collection, Optional, Sequence

from .canonical import DateLike, Numeric
from .config import MAX_BATCH_SIZE, MIN_SALT_SIZE_BYTES
from .exceptions import InvalidArgumentError
from .provider import CommitmentProvider
from .settings import get_required_age
from .statements import (
    AgeStatement,
    BalanceStatement,
    MembershipStatement,
    RangeStatement,
    Statement,
    TimeConditionStatement,
)
from .types import ProofBundle

logger = logging.getLogger(__name__)


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def _is_proof_text(value: object) -> bool:
    return isinstance(value, str) and value != ""


def _is_salt_text(value: object) -> bool:
    """Salt must be strict Base64 of at least MIN_SALT_SIZE_BYTES."""
    if not isinstance(value, str) or not value:
        return False
    try:
        raw = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return len(raw) >= MIN_SALT_SIZE_BYTES


class ProofEngine:
    """
    Prove/verify pairs for the age, balance, membership, range and
    time-condition predicates.

    Example:
        >>> engine = ProofEngine(CommitmentProvider(key_b64))
        >>> proof, salt = engine.prove_balance(1000, 500)
        >>> engine.verify_balance(proof, salt, 1000, 500)
        True
    """

    def __init__(
        self,
        provider: CommitmentProvider,
        *,
        required_age: Optional[int] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        """
        Args:
            provider: Commitment provider holding the secret key
            required_age: Default age threshold (falls back to settings)
            clock: Returns "today"; defaults to the current UTC date
        """
        if provider is None:
            raise TypeError("provider is required")
        self._provider = provider
        self._required_age = get_required_age(required_age)
        self._clock = clock or _utc_today

    @property
    def provider(self) -> CommitmentProvider:
        return self._provider

    @property
    def required_age(self) -> int:
        return self._required_age

    def today(self) -> date:
        return self._clock()

    # ========================================================================
    # GENERIC PATH
    # ========================================================================

    def _commit(self, canonical_value: str, salt: str) -> str:
        return self._provider.compute_mac(canonical_value + salt)

    def prove(self, statement: Statement) -> ProofBundle:
        """
        Issue a commitment proof for a statement that holds.

        Raises:
            InvalidArgumentError: If a structural precondition fails
            PredicateNotSatisfiedError: If the predicate is false
        """
        today = self.today()
        statement.validate(today)
        statement.check(today)

        salt = self._provider.generate_salt()
        proof = self._commit(statement.canonical_value(), salt)
        logger.debug("Issued %s proof", statement.predicate_type.value)
        return ProofBundle(
            proof=proof, salt=salt, predicate=statement.predicate_type.value
        )

    def verify(self, proof: str, salt: str, statement: Statement) -> bool:
        """
        Check a proof against a revealed statement.

        Never raises for malformed input; returns False instead.
        """
        predicate = statement.predicate_type.value
        if not _is_proof_text(proof) or not _is_salt_text(salt):
            logger.debug("Rejected %s proof: missing proof or salt", predicate)
            return False

        today = self.today()
        try:
            statement.validate(today)
            expected = self._commit(statement.canonical_value(), salt)
            predicate_holds = statement.holds(today)
        except InvalidArgumentError as e:
            logger.debug("Rejected %s proof: %s", predicate, e.field)
            return False

        mac_matches = self._provider.constant_time_equals(expected, proof)
        if not mac_matches:
            logger.debug("Rejected %s proof: commitment mismatch", predicate)
        elif not predicate_holds:
            logger.debug("Rejected %s proof: predicate no longer holds", predicate)
        return mac_matches and predicate_holds

    # ========================================================================
    # AGE
    # ========================================================================

    def _age_statement(
        self, date_of_birth: DateLike, required_age: Optional[int]
    ) -> AgeStatement:
        threshold = self._required_age if required_age is None else required_age
        return AgeStatement(date_of_birth=date_of_birth, required_age=threshold)

    def prove_age(
        self, date_of_birth: DateLike, required_age: Optional[int] = None
    ) -> ProofBundle:
        return self.prove(self._age_statement(date_of_birth, required_age))

    def verify_age(
        self,
        proof: str,
        salt: str,
        date_of_birth: DateLike,
        required_age: Optional[int] = None,
    ) -> bool:
        return self.verify(proof, salt, self._age_statement(date_of_birth, required_age))

    # ========================================================================
    # BALANCE
    # ========================================================================

    def prove_balance(self, balance: Numeric, requested: Numeric) -> ProofBundle:
        return self.prove(BalanceStatement(balance=balance, requested=requested))

    def verify_balance(
        self, proof: str, salt: str, balance: Numeric, requested: Numeric
    ) -> bool:
        return self.verify(
            proof, salt, BalanceStatement(balance=balance, requested=requested)
        )

    # ========================================================================
    # MEMBERSHIP
    # ========================================================================

    def prove_membership(
        self, value: str, valid_values: Collection[str]
    ) -> ProofBundle:
        return self.prove(MembershipStatement(value=value, valid_values=valid_values))

    def verify_membership(
        self, proof: str, salt: str, value: str, valid_values: Collection[str]
    ) -> bool:
        return self.verify(
            proof, salt, MembershipStatement(value=value, valid_values=valid_values)
        )

    # ========================================================================
    # RANGE
    # ========================================================================

    def prove_range(
        self, value: Numeric, min_value: Numeric, max_value: Numeric
    ) -> ProofBundle:
        return self.prove(
            RangeStatement(value=value, min_value=min_value, max_value=max_value)
        )

    def verify_range(
        self,
        proof: str,
        salt: str,
        value: Numeric,
        min_value: Numeric,
        max_value: Numeric,
    ) -> bool:
        return self.verify(
            proof,
            salt,
            RangeStatement(value=value, min_value=min_value, max_value=max_value),
        )

    # ========================================================================
    # TIME CONDITION
    # ========================================================================

    def prove_time_condition(
        self, event_date: DateLike, condition_date: DateLike
    ) -> ProofBundle:
        return self.prove(
            TimeConditionStatement(event_date=event_date, condition_date=condition_date)
        )

    def verify_time_condition(
        self,
        proof: str,
        salt: str,
        event_date: DateLike,
        condition_date: DateLike,
    ) -> bool:
        return self.verify(
            proof,
            salt,
            TimeConditionStatement(event_date=event_date, condition_date=condition_date),
        )

    # ========================================================================
    # RAW COMMITMENTS / BATCH
    # ========================================================================

    def verify_commitment(self, proof: str, salt: str, data: str) -> bool:
        """
        Check MAC(data + salt) against proof, with no predicate re-check.

        data is the already-canonical value, as a remote verifier contract
        receives it.
        """
        if not _is_proof_text(proof) or not _is_salt_text(salt):
            return False
        if not isinstance(data, str):
            return False
        return self._provider.constant_time_equals(self._commit(data, salt), proof)

    def verify_batch(
        self,
        proofs: Sequence[str],
        data: Sequence[str],
        salts: Sequence[str],
    ) -> bool:
        """
        Verify parallel sequences of proofs, canonical values and salts.

        Returns False on a length mismatch, an empty or oversized batch, or
        at the first commitment that does not verify.
        """
        try:
            count = len(proofs)
            if count != len(data) or count != len(salts):
                logger.debug("Rejected batch: parallel sequences differ in length")
                return False
        except TypeError:
            return False

        if count == 0 or count > MAX_BATCH_SIZE:
            logger.debug("Rejected batch of %d commitments", count)
            return False

        for index, (proof, value, salt) in enumerate(zip(proofs, data, salts)):
            if not self.verify_commitment(proof, salt, value):
                logger.debug("Rejected batch at index %d", index)
                return False
        return True
