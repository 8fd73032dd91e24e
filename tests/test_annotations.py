"""Tests for comment block association and structure validation."""

import pytest

from contractlint.scan import associate, detect_tags, find_comment_blocks, validate_comment_structure


def test_line_comment_tag():
    block = associate(["// @throws {TypeError}", "function f() {"], 1, lookback=10)
    assert block is not None
    assert block.has("throws")
    assert block.start_line == 1


def test_jsdoc_block():
    lines = ["/**", " * Loads a user.", " * @returns {Promise<User>}", " */", "async function load() {"]
    block = associate(lines, 4, lookback=10)
    assert block.tags == frozenset({"returns"})
    assert (block.start_line, block.end_line) == (1, 4)


def test_blank_lines_are_stepped_over():
    block = associate(["// @throws {X}", "", "function f() {"], 2, lookback=10)
    assert block is not None and block.has("throws")


def test_stops_at_previous_code():
    lines = ["// @throws {X}", "function a() { throw new X(); }", "function b() {"]
    assert associate(lines, 2, lookback=10) is None


def test_lookback_window():
    lines = ["// @throws {X}"] + ["// filler"] * 10 + ["function f() {"]
    assert not associate(lines, 11, lookback=10).has("throws")
    assert associate(lines, 11, lookback=11).has("throws")


def test_lookback_must_be_positive():
    with pytest.raises(ValueError):
        associate(["function f() {"], 0, lookback=0)


def test_tag_variants():
    assert detect_tags(["// @return {number}"]) == frozenset({"returns"})
    assert detect_tags(["// @requires await"]) == frozenset({"async-boundary"})
    assert detect_tags(["// @mutates-state: app.x"]) == frozenset({"mutates-state"})
    assert detect_tags(["// nothing here"]) == frozenset()


def test_detached_block():
    lines = ["// @throws {X}", "", "", "function f() {"]
    blocks = find_comment_blocks(lines, 3)
    assert len(blocks) == 1
    report = validate_comment_structure(blocks, 3)
    assert not report.valid
    assert report.gap_lines == 2


def test_attached_blocks():
    lines = ["/**", " * Does things.", " */", "// @throws {X}", "function f() {"]
    blocks = find_comment_blocks(lines, 4)
    assert [b.style for b in blocks] == ["jsdoc", "compact"]
    assert validate_comment_structure(blocks, 4).valid


def test_no_blocks():
    assert not validate_comment_structure([], 0).valid
