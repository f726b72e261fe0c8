# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the EmmyLua annotation fragment renderers."""

from luastubs.export.buffer import OutputBuffer
from luastubs.export.formatter import (
    write_comment_and_location,
    write_constructor_overload,
    write_default_constructor_overload,
    write_delegate_alias,
    write_enum_field,
    write_event_annotation,
    write_field_annotation,
    write_method_declaration,
    write_parameter_annotations,
    write_return_annotation,
    write_type_annotation,
)
from luastubs.model.declarations import Member, Method, Parameter, PassingMode

# ###############
# Helpers
# ###############


def _render(fn, *args, **kwargs) -> str:
    out = OutputBuffer()
    fn(out, *args, **kwargs)
    return out.getvalue()


def _param(name: str, type_name: str, mode: PassingMode = PassingMode.NORMAL, **kwargs) -> Parameter:
    return Parameter(name=name, type_name=type_name, passing_mode=mode, **kwargs)


# ###############
# Buffer
# ###############


def test_buffer_tracks_utf8_size() -> None:
    out = OutputBuffer()
    out.line("abc")
    out.write("é")
    assert out.getvalue() == "abc\né"
    assert out.size == 6
    out.clear()
    assert out.size == 0
    assert out.getvalue() == ""


# ###############
# Comments and locations
# ###############


def test_comment_lines_are_reprefixed() -> None:
    text = _render(write_comment_and_location, "First line\nSecond line", None)
    assert text == "---First line\n---Second line\n"


def test_file_location_is_emitted_with_escaped_quotes() -> None:
    text = _render(write_comment_and_location, None, 'file:///C:/src/"Player".cs')
    assert text == "---@source \"file:///C:/src/'Player'.cs\"\n"


def test_non_file_location_is_ignored() -> None:
    assert _render(write_comment_and_location, None, "C:/src/Player.cs") == ""


def test_missing_comment_and_location_render_nothing() -> None:
    assert _render(write_comment_and_location, None, None) == ""
    assert _render(write_comment_and_location, "", "") == ""


def test_indented_comment() -> None:
    text = _render(write_comment_and_location, "a\nb", "file:///x.cs", indent=4)
    assert text == '    ---a\n    ---b\n    ---@source "file:///x.cs"\n'


# ###############
# Type headers
# ###############


def test_type_header_plain() -> None:
    assert _render(write_type_annotation, "enum", "CS.Game.Team") == "---@enum CS.Game.Team\n"


def test_type_header_with_generics_and_supertypes() -> None:
    text = _render(
        write_type_annotation,
        "class",
        "CS.Game.Pool",
        "Game.PoolBase",
        ["System.IDisposable", "CS.Game.IPool"],
        ["T"],
    )
    assert text == "---@class CS.Game.Pool<T>: CS.Game.PoolBase, System.IDisposable, CS.Game.IPool\n"


def test_type_header_interfaces_only() -> None:
    text = _render(write_type_annotation, "interface", "CS.Game.IPool", None, ["Game.IBase"])
    assert text == "---@interface CS.Game.IPool: CS.Game.IBase\n"


# ###############
# Fields and events
# ###############


def test_field_annotation() -> None:
    text = _render(write_field_annotation, "int", "Player", "health")
    assert text == "---@type integer\nPlayer.health = nil\n\n"


def test_event_annotation_matches_field_shape() -> None:
    text = _render(write_event_annotation, "System.Action", "Player", "OnDied")
    assert text == "---@type System.Action\nPlayer.OnDied = nil\n\n"


def test_keyword_field_uses_bracket_access() -> None:
    text = _render(write_field_annotation, "bool", "Loop", "end")
    assert 'Loop["end"] = nil' in text


# ###############
# Parameters and returns
# ###############


def test_out_parameters_are_skipped_but_collected() -> None:
    out = OutputBuffer()
    params = [
        _param("key", "string", comment="Lookup key"),
        _param("value", "int", PassingMode.OUT),
        _param("count", "long", PassingMode.REF),
    ]
    extra = write_parameter_annotations(out, params)

    assert out.getvalue() == "---@param key string Lookup key\n---@param count integer\n"
    assert [p.name for p in extra] == ["value", "count"]


def test_parameter_comment_line_breaks() -> None:
    text = _render(write_parameter_annotations, [_param("x", "int", comment="a\nb")])
    assert text == "---@param x integer a\n---b\n"


def test_return_with_extra_values_in_order() -> None:
    extra = [_param("a", "int", PassingMode.OUT), _param("b", "Game.Item", PassingMode.REF)]
    text = _render(write_return_annotation, "bool", extra)
    assert text == "---@return boolean, integer, CS.Game.Item\n"


def test_void_method_return_keeps_void() -> None:
    text = _render(write_return_annotation, "void", [_param("a", "int", PassingMode.OUT)])
    assert text == "---@return void, integer\n"


# ###############
# Method skeletons and constructors
# ###############


def test_instance_method_declaration() -> None:
    params = [_param("a", "int"), _param("result", "int", PassingMode.OUT), _param("end", "int")]
    text = _render(write_method_declaration, "Player", "Move", params, False)
    assert text == "function Player:Move(a, _end)\nend\n\n"


def test_static_method_declaration() -> None:
    text = _render(write_method_declaration, "Player", "Create", [], True)
    assert text == "function Player.Create()\nend\n\n"


def test_keyword_instance_method_is_assigned_with_self() -> None:
    params = [_param("a", "int"), _param("done", "bool", PassingMode.OUT)]
    text = _render(write_method_declaration, "Loop", "end", params, False)
    assert text == 'Loop["end"] = function(self, a)\nend\n\n'


def test_keyword_static_method_without_parameters() -> None:
    text = _render(write_method_declaration, "Loop", "repeat", [], True)
    assert text == 'Loop["repeat"] = function()\nend\n\n'


def test_keyword_instance_method_without_parameters() -> None:
    assert _render(write_method_declaration, "Loop", "end", [], False) == 'Loop["end"] = function(self)\nend\n\n'


def test_constructor_overload() -> None:
    ctor = Method(name=".ctor", parameters=[_param("name", "string"), _param("level", "int")])
    text = _render(write_constructor_overload, ctor, "CS.Game.Player")
    assert text == "---@overload fun(name: string, level: integer): CS.Game.Player\n"


def test_default_constructor_overload() -> None:
    assert _render(write_default_constructor_overload, "CS.Game.Player") == "---@overload fun(): CS.Game.Player\n"


# ###############
# Delegates
# ###############


def test_delegate_void_with_single_out_returns_out_type() -> None:
    invoke = Method(name="Invoke", return_type_name="void", parameters=[_param("result", "int", PassingMode.OUT)])
    text = _render(write_delegate_alias, "CS.Game.Getter", invoke)
    assert text == "---@alias CS.Game.Getter fun(): integer\n"


def test_delegate_without_returns_is_void() -> None:
    invoke = Method(name="Invoke", parameters=[_param("x", "float")])
    text = _render(write_delegate_alias, "CS.Game.Handler", invoke)
    assert text == "---@alias CS.Game.Handler fun(x: number): void\n"


def test_delegate_multiple_returns_and_nullable_parameter() -> None:
    invoke = Method(
        name="Invoke",
        return_type_name="bool",
        parameters=[
            _param("target", "Game.Enemy", nullable=True),
            _param("damage", "int", PassingMode.REF),
            _param("killed", "bool", PassingMode.OUT),
        ],
    )
    text = _render(write_delegate_alias, "CS.Game.Hit", invoke)
    assert text == "---@alias CS.Game.Hit fun(target?: CS.Game.Enemy, damage: integer): boolean, integer, boolean\n"


# ###############
# Enum entries
# ###############


def test_enum_field_values() -> None:
    out = OutputBuffer()
    write_enum_field(out, Member(name="Red", constant_value=5))
    write_enum_field(out, Member(name="Blue"))
    assert out.getvalue() == "    Red = 5,\n\n    Blue = 0,\n\n"


def test_enum_field_with_comment_and_keyword_name() -> None:
    text = _render(write_enum_field, Member(name="end", comment="Last", constant_value=-1))
    assert text == '    ---Last\n    ["end"] = -1,\n\n'
