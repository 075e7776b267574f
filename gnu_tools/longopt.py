"""Long option descriptors for GNU-style command line parsing.

A list of LongOpt objects defines the valid long options for one parsing
session. The parsing loop itself lives elsewhere; this module only holds
and validates the option definitions.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from gnu_tools.config import GetoptConfig

logger = logging.getLogger(__name__)

STRICT_LANGUAGE = "en-US"

# Localized diagnostics, keyed by message id and then language tag.
MESSAGES: dict[str, dict[str, str]] = {
    "getopt.invalidValue": {
        "en-US": "Invalid value {0} for parameter 'has_arg'",
        "de": "Ungültiger Wert {0} für Parameter 'has_arg'",
        "fr": "Valeur invalide {0} pour le paramètre 'has_arg'",
        "es": "Valor no válido {0} para el parámetro 'has_arg'",
        "nl": "Ongeldige waarde {0} voor parameter 'has_arg'",
        "ja": "パラメータ 'has_arg' に対する無効な値 {0}",
        "cs": "Neplatná hodnota {0} pro parametr 'has_arg'",
    },
}


class Argument(enum.IntEnum):
    """Whether a long option takes an argument."""

    NO = 0
    REQUIRED = 1
    OPTIONAL = 2


class InvalidArgument(ValueError):
    """Raised when a LongOpt is defined with an unknown argument policy."""

    def __init__(self, message: str, value: Any) -> None:
        super().__init__(message)
        self.value = value


@dataclass(eq=False)
class Flag:
    """Caller-owned slot that a parser fills with an option's ``val``."""

    value: Optional[int] = None


def resolve_language(config: Optional[GetoptConfig]) -> str:
    """Pick the language used for diagnostics.

    Strict mode, a missing config or an unreadable flag all select en-US.
    """
    if config is None:
        return STRICT_LANGUAGE
    posixly_correct = getattr(config, "posixly_correct", True)
    if not isinstance(posixly_correct, bool) or posixly_correct:
        return STRICT_LANGUAGE
    return config.ui_language or STRICT_LANGUAGE


def get_message(message_id: str, language: str) -> str:
    """Look up a message, falling back from ``de-AT`` to ``de`` to en-US."""
    translations = MESSAGES[message_id]
    if language in translations:
        return translations[language]
    primary = language.replace("_", "-").split("-")[0]
    if primary in translations:
        return translations[primary]
    return translations[STRICT_LANGUAGE]


def _coerce_argument(has_arg: Any) -> Optional[Argument]:
    """Map ``has_arg`` to an Argument member, or None if it is not one.

    Bools are rejected even though they are ints.
    """
    if isinstance(has_arg, bool) or not isinstance(has_arg, int):
        return None
    try:
        return Argument(has_arg)
    except ValueError:
        return None


@dataclass(frozen=True)
class LongOpt:
    """The definition of one long option.

    Args:
        name: The long option string, without the leading dashes.
        has_arg: One of Argument.NO, Argument.REQUIRED or Argument.OPTIONAL.
        flag: If not None, the parser stores ``val`` here when the option is
            encountered. Otherwise ``val`` is the equivalent short option.
        val: The value to store in ``flag``, or the short option character
            code to emulate when ``flag`` is None.
        config: Getopt settings used to pick the diagnostic language.

    Raises:
        InvalidArgument: If ``has_arg`` is not a recognized policy.
    """

    name: str
    has_arg: Argument
    flag: Optional[Flag]
    val: int
    config: Optional[GetoptConfig] = field(
        default=None, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        language = resolve_language(self.config)
        argument = _coerce_argument(self.has_arg)
        if argument is None:
            message = get_message("getopt.invalidValue", language).format(
                self.has_arg
            )
            logger.debug("Rejected long option %r: %s", self.name, message)
            raise InvalidArgument(message, self.has_arg)
        object.__setattr__(self, "has_arg", argument)
