"""Tests for pawprint._errors."""

from pawprint._errors import (
    ConfigError,
    ExportError,
    PawprintError,
    RouteConflictError,
    ScanError,
)


class TestErrorHierarchy:
    """All pawprint errors inherit from PawprintError."""

    def test_pawprint_error_is_exception(self) -> None:
        assert issubclass(PawprintError, Exception)

    def test_subclasses_inherit(self) -> None:
        for error_cls in (ConfigError, ScanError, RouteConflictError, ExportError):
            assert issubclass(error_cls, PawprintError)

    def test_catch_all_pawprint_errors(self) -> None:
        """All specific errors are catchable via PawprintError."""
        for error_cls in (ConfigError, ScanError, RouteConflictError, ExportError):
            try:
                raise error_cls("test")
            except PawprintError:
                pass  # Expected — all caught by base class


class TestRouteConflictError:
    def test_conflicts_default_empty(self) -> None:
        assert RouteConflictError("boom").conflicts == ()

    def test_message_preserved(self) -> None:
        assert str(RouteConflictError("Clashing page routes (1)")) == "Clashing page routes (1)"
