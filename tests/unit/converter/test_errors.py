"""Unit tests for converter.errors module."""

from src.converter.errors import (
    ConversionError,
    DepthExceededError,
    GetMdError,
    MalformedTreeError,
    ParserUnavailableError,
    UnresolvableUrlError,
)


class TestErrorHierarchy:
    """Test cases for the exception hierarchy."""

    def test_all_conversion_errors_share_base(self):
        for error in (
            MalformedTreeError(1, "x"),
            DepthExceededError(3, 2),
            UnresolvableUrlError("/x", None, "no base URL"),
            ParserUnavailableError("lxml"),
        ):
            assert isinstance(error, ConversionError)
            assert isinstance(error, GetMdError)


class TestErrorMessages:
    """Test cases for error messages and context attributes."""

    def test_malformed_tree_with_index(self):
        error = MalformedTreeError(4, "cycle")

        assert str(error) == "Malformed document tree at node 4: cycle"
        assert error.node_index == 4
        assert error.reason == "cycle"

    def test_malformed_tree_without_index(self):
        assert str(MalformedTreeError(None, "empty")) == "Malformed document tree: empty"

    def test_depth_exceeded(self):
        error = DepthExceededError(201, 200)

        assert str(error) == "Document nesting depth 201 exceeds the limit of 200"
        assert (error.depth, error.limit) == (201, 200)

    def test_unresolvable_url(self):
        error = UnresolvableUrlError("/x", None, "no base URL")

        assert str(error) == "Cannot resolve URL '/x' against base 'None': no base URL"

    def test_parser_unavailable(self):
        error = ParserUnavailableError("html5lib")

        assert "html5lib" in str(error)
        assert "pip install html5lib" in str(error)
