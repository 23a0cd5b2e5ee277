"""
Field validator.

Runs a field's full rule chain against a value and combines the outcome
into a single ValidationResult.
"""

import functools
import logging
from typing import TYPE_CHECKING

from form_engine.config import get_config
from form_engine.models.field_value import FieldValueBase
from form_engine.models.validation_result import ValidationResult

if TYPE_CHECKING:
    from form_engine.components.fields import FieldDescriptor

logger = logging.getLogger(__name__)


class FormValidator:
    """
    Stateless evaluator for field descriptors, with optional memoization.

    Every rule always runs: errors from all rules are collected in rule
    order and stamped with the field id. The result is valid exactly when
    no rule produced an error.

    Results are memoized in a bounded LRU cache keyed on the descriptor
    and the typed value. Both are immutable and hashable, so a cache hit
    is always what a fresh run would return.

    Usage:
        validator = FormValidator()
        result = validator.validate(text_field("email").email(), TextValue("a@b.co"))
    """

    def __init__(self, cache_size: int | None = None):
        """
        Initialize the validator.

        Args:
            cache_size: Maximum number of memoized results. 0 disables the
                cache. If None, uses config.validator_cache_size.
        """
        if cache_size is None:
            cache_size = get_config().validator_cache_size
        if cache_size < 0:
            raise ValueError("cache_size must be >= 0")
        self.cache_size = cache_size
        self._cached_run = (
            functools.lru_cache(maxsize=cache_size)(self._run_rules) if cache_size else None
        )

    @property
    def cache_enabled(self) -> bool:
        return self._cached_run is not None

    def validate(self, descriptor: "FieldDescriptor", value: FieldValueBase) -> ValidationResult:
        """
        Validate a value against every rule of a field.

        Args:
            descriptor: The field whose rules apply
            value: The current value of the field

        Returns:
            Combined ValidationResult for the field
        """
        if self._cached_run is not None:
            return self._cached_run(descriptor, value)
        return self._run_rules(descriptor, value)

    def cache_info(self) -> functools._CacheInfo | None:
        """Hit/miss statistics of the memoization cache, if enabled."""
        if self._cached_run is None:
            return None
        return self._cached_run.cache_info()

    def clear_cache(self) -> None:
        if self._cached_run is not None:
            self._cached_run.cache_clear()

    @staticmethod
    def _run_rules(descriptor: "FieldDescriptor", value: FieldValueBase) -> ValidationResult:
        errors = []
        for rule in descriptor.validation_rules:
            result = rule.validate(value)
            errors.extend(error.for_field(descriptor.id) for error in result.errors)

        result = ValidationResult.from_errors(errors)
        if not result.is_valid:
            logger.debug("Field '%s' failed validation: %s", descriptor.id, result.codes)
        return result
