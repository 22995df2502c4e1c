import pytest

gr = pytest.importorskip("gradio")

from four_word_phrase.app.app import PhraseApp
from four_word_phrase.app.data.word_store import MemoryWordStore
from four_word_phrase.app.ui.gradio import (
    SHARE_ENV,
    create_interface,
    generate_markdown,
    should_share_interface,
)


def test_generate_markdown_numbers_from_start_count(hyphenated_store):
    app = PhraseApp(store=hyphenated_store)

    rendered = generate_markdown(app, "ui", 3, 2, 5)

    lines = rendered.splitlines()
    assert lines[0].startswith("6. ")
    assert lines[1].startswith("7. ")
    assert app.generator.base_seed == "ui"


def test_generate_markdown_reports_errors():
    app = PhraseApp(store=MemoryWordStore())

    rendered = generate_markdown(app, "ui", 4, 1, 0)

    assert rendered.startswith("**Error** `empty_dictionary: ")


def test_should_share_interface(monkeypatch):
    monkeypatch.setenv(SHARE_ENV, "yes")
    assert should_share_interface() is True

    monkeypatch.setenv(SHARE_ENV, "0")
    assert should_share_interface() is False


def test_create_interface_builds_blocks(hyphenated_store):
    demo = create_interface(PhraseApp(store=hyphenated_store))

    assert isinstance(demo, gr.Blocks)
