"""Tests for long option descriptors."""

import dataclasses

import pytest

from gnu_tools.config import GetoptConfig
from gnu_tools.longopt import (
    Argument,
    Flag,
    InvalidArgument,
    LongOpt,
    get_message,
    resolve_language,
)


class TestConstruction:
    """Test accepted and rejected argument policies."""

    @pytest.mark.parametrize(
        "has_arg", [Argument.NO, Argument.REQUIRED, Argument.OPTIONAL]
    )
    def test_valid_policies(self, has_arg):
        """Accessors return exactly what was passed in."""
        flag = Flag()
        opt = LongOpt("verbose", has_arg, flag, 1)

        assert opt.name == "verbose"
        assert opt.has_arg is has_arg
        assert opt.flag is flag
        assert opt.val == 1

    @pytest.mark.parametrize("value, expected", [(0, Argument.NO), (1, Argument.REQUIRED), (2, Argument.OPTIONAL)])
    def test_integer_policies(self, value, expected):
        """The getopt integer constants are accepted and normalized."""
        opt = LongOpt("output", value, None, ord("o"))
        assert opt.has_arg is expected
        assert opt.has_arg == value

    @pytest.mark.parametrize("has_arg", [3, -1, 42, "required", None, 1.0, True])
    def test_invalid_policies(self, has_arg):
        """Anything outside the three policies is rejected."""
        with pytest.raises(InvalidArgument) as excinfo:
            LongOpt("output", has_arg, None, ord("o"))
        assert excinfo.value.value is has_arg

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            LongOpt("output", 7, None, ord("o"))

    def test_short_option_equivalent(self):
        """Without a flag, val names the equivalent short option."""
        opt = LongOpt("help", Argument.NO, None, ord("h"))
        assert opt.flag is None
        assert chr(opt.val) == "h"


class TestImmutability:
    """Test that descriptors never change after construction."""

    def test_attributes_are_read_only(self):
        opt = LongOpt("verbose", Argument.NO, None, ord("v"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            opt.name = "quiet"
        with pytest.raises(dataclasses.FrozenInstanceError):
            opt.has_arg = Argument.REQUIRED

    def test_reads_are_stable(self):
        flag = Flag()
        opt = LongOpt("color", Argument.OPTIONAL, flag, 3)
        first = (opt.name, opt.has_arg, opt.flag, opt.val)
        second = (opt.name, opt.has_arg, opt.flag, opt.val)
        assert first == second

    def test_flag_is_not_written(self):
        """The descriptor only borrows the flag slot."""
        flag = Flag()
        LongOpt("color", Argument.OPTIONAL, flag, 3)
        assert flag.value is None

    def test_hashable_with_flag(self):
        opt = LongOpt("color", Argument.OPTIONAL, Flag(), 3)
        assert opt in {opt}


class TestMessageLanguage:
    """Test selection of the diagnostic language."""

    def test_default_is_english(self):
        with pytest.raises(InvalidArgument, match="Invalid value 5 for parameter 'has_arg'"):
            LongOpt("output", 5, None, ord("o"))

    def test_strict_mode_forces_english(self):
        config = GetoptConfig(posixly_correct=True, ui_language="de")
        with pytest.raises(InvalidArgument, match="Invalid value 5"):
            LongOpt("output", 5, None, ord("o"), config=config)

    def test_ui_language_when_not_strict(self):
        config = GetoptConfig(posixly_correct=False, ui_language="de")
        with pytest.raises(InvalidArgument, match="Ungültiger Wert 5"):
            LongOpt("output", 5, None, ord("o"), config=config)

    def test_region_falls_back_to_primary_language(self):
        config = GetoptConfig(posixly_correct=False, ui_language="fr-CA")
        with pytest.raises(InvalidArgument, match="Valeur invalide 5"):
            LongOpt("output", 5, None, ord("o"), config=config)

    def test_unreadable_flag_defaults_to_strict(self):
        config = GetoptConfig(posixly_correct="maybe", ui_language="de")
        assert resolve_language(config) == "en-US"

    def test_missing_config_is_strict(self):
        assert resolve_language(None) == "en-US"

    def test_unknown_language_falls_back_to_english(self):
        assert get_message("getopt.invalidValue", "xx-YY").startswith("Invalid value")

    def test_config_does_not_affect_validation(self):
        config = GetoptConfig(posixly_correct=False, ui_language="ja")
        opt = LongOpt("output", Argument.REQUIRED, None, ord("o"), config=config)
        assert opt.has_arg is Argument.REQUIRED
