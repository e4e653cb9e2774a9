import logging

import pytest

from restdoc_codegen.errors import (
    MissingResponseError,
    UnknownParameterKindError,
    UnknownTypeError,
    UnsupportedTypeError,
)
from restdoc_codegen.parser.base import ParameterKind, TypeDescriptor
from restdoc_codegen.parser.html import parse_document
from restdoc_codegen.parser.operations import BlockKind, extract_operations, split_request_line

RESPONSES_USER = (
    '<div class="sect4"><h5>Responses</h5><table><tbody><tr>'
    "<td><p><strong>200</strong></p></td><td><p>success</p></td>"
    "<td><p>UserRepresentation</p></td></tr></tbody></table></div>"
)


def _param(kind: str, name: str, type_token: str, optional: bool = False, comment: str | None = None) -> str:
    marker = "optional" if optional else "required"
    comment_cell = f"<td><p>{comment}</p></td>" if comment is not None else "<td></td>"
    return (
        f"<tr><td><p><strong>{kind}</strong></p></td>"
        f"<td><p><strong>{name}</strong><br><em>{marker}</em></p></td>"
        f"{comment_cell}<td><p>{type_token}</p></td></tr>"
    )


def _parameters(*rows: str) -> str:
    return f'<div class="sect4"><h5>Parameters</h5><table><tbody>{"".join(rows)}</tbody></table></div>'


def _response(type_token: str) -> str:
    return RESPONSES_USER.replace("UserRepresentation", type_token)


def _method(name: str, request_line: str | None, *blocks: str) -> str:
    pre = f"<pre>{request_line}</pre>" if request_line is not None else ""
    return f'<div class="sect3"><h4>{name}</h4>{pre}{"".join(blocks)}</div>'


def _doc(*resources: tuple[str, list[str]]) -> str:
    body = "".join(
        f'<div class="sect2"><h3>{name}</h3>{"".join(methods)}</div>' for name, methods in resources
    )
    return (
        '<html><body><div class="sect1"><h2 id="_paths">Resources</h2>'
        f'<div class="sectionbody">{body}</div></div></body></html>'
    )


def _extract(*resources):
    return extract_operations(parse_document(_doc(*resources)))


class TestSplitRequestLine:
    def test_verb_and_path(self):
        assert split_request_line("GET /users/{id}") == ("GET", "/users/{id}")

    def test_no_space(self):
        assert split_request_line("GET") == ("GET", "")


class TestBlockKind:
    @pytest.mark.parametrize("heading,kind", [
        ("Parameters", BlockKind.PARAMETERS),
        ("Responses", BlockKind.RESPONSES),
        ("Produces", BlockKind.PRODUCES),
        ("Consumes", BlockKind.UNSUPPORTED),
        ("Tags", BlockKind.UNSUPPORTED),
    ])
    def test_from_heading(self, heading, kind):
        assert BlockKind.from_heading(heading) is kind


class TestExtractOperations:
    def test_get_user(self):
        method = _method(
            "Get user",
            "GET /users/{id}",
            _parameters(_param("Path", "id", "string", comment="User id")),
            RESPONSES_USER,
        )
        operations = _extract(("Users", [method]))
        assert len(operations) == 1
        op = operations[0]
        assert op.name == "Get user"
        assert op.comment == "Users"
        assert op.method == "GET"
        assert op.path == "/users/{id}"
        assert len(op.parameters) == 1
        param = op.parameters[0]
        assert param.kind is ParameterKind.PATH
        assert param.name == "id"
        assert param.comment == "User id"
        assert param.is_optional is False
        assert param.type == TypeDescriptor.borrowed("str")
        assert op.response.type == TypeDescriptor.reference("UserRepresentation")
        assert op.response.is_array is False

    def test_parameter_flags(self):
        method = _method(
            "Get users",
            "GET /{realm}/users",
            _parameters(
                _param("Query", "first", "integer(int32)", optional=True),
                _param("Query", "ids", "&lt; string &gt; array", optional=True),
            ),
            _response("&lt; UserRepresentation &gt; array"),
        )
        op = _extract(("Users", [method]))[0]
        first, ids = op.parameters
        assert first.kind is ParameterKind.QUERY
        assert first.is_optional is True
        assert first.comment is None
        assert first.type == TypeDescriptor.primitive("i32")
        assert ids.is_array is True
        assert op.response.is_array is True
        assert op.response.type == TypeDescriptor.reference("UserRepresentation")

    def test_type_in_last_column(self):
        row = (
            "<tr><td><p><strong>Body</strong></p></td>"
            "<td><p><strong>rep</strong><br><em>required</em></p></td>"
            "<td><p>GroupRepresentation</p></td></tr>"
        )
        op = _extract(("Groups", [_method("Update", "PUT /groups", _parameters(row), _response("No Content"))]))[0]
        assert op.parameters[0].kind is ParameterKind.BODY
        assert op.parameters[0].type == TypeDescriptor.reference("GroupRepresentation")
        assert op.response.type == TypeDescriptor.primitive("unit")

    def test_order_across_resources(self):
        operations = _extract(
            ("Users", [_method("A", "GET /a", _response("No Content")), _method("B", "GET /b", _response("No Content"))]),
            ("Groups", [_method("C", "GET /c", _response("No Content"))]),
        )
        assert [op.name for op in operations] == ["A", "B", "C"]
        assert [op.comment for op in operations] == ["Users", "Users", "Groups"]

    def test_missing_request_line_falls_back_to_name(self, caplog):
        with caplog.at_level(logging.WARNING):
            op = _extract(("Users", [_method("Get users", None, _response("No Content"))]))[0]
        assert op.method == "Get"
        assert op.path == "users"
        assert "falling back" in caplog.text

    def test_produces_ignored_and_unsupported_logged(self, caplog):
        blocks = [
            '<div class="sect4"><h5>Produces</h5><ul><li>application/json</li></ul></div>',
            '<div class="sect4"><h5>Consumes</h5><ul><li>application/json</li></ul></div>',
            _response("No Content"),
        ]
        with caplog.at_level(logging.WARNING):
            op = _extract(("Users", [_method("Delete", "DELETE /x", *blocks)]))[0]
        assert op.parameters == []
        assert "Unsupported block Consumes" in caplog.text
        assert "Produces" not in caplog.text

    def test_missing_responses_is_fatal(self):
        with pytest.raises(MissingResponseError):
            _extract(("Users", [_method("Get", "GET /x", _parameters(_param("Path", "id", "string")))]))

    def test_unknown_parameter_kind_is_fatal(self):
        method = _method("Get", "GET /x", _parameters(_param("Header", "auth", "string")), _response("No Content"))
        with pytest.raises(UnknownParameterKindError):
            _extract(("Users", [method]))

    def test_inline_enum_parameter_is_fatal(self):
        method = _method(
            "Get", "GET /x", _parameters(_param("Query", "mode", "enum (A, B)")), _response("No Content")
        )
        with pytest.raises(UnsupportedTypeError):
            _extract(("Users", [method]))

    def test_unknown_response_type_is_fatal(self):
        with pytest.raises(UnknownTypeError):
            _extract(("Users", [_method("Get", "GET /x", _response("uuid"))]))
