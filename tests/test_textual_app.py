from types import SimpleNamespace

from quill_engine.adapters.textual.app import QuillEditorApp, _parse_args


def key_event(key: str, character: str | None = None) -> SimpleNamespace:
    return SimpleNamespace(
        key=key, character=character, is_printable=character is not None
    )


def test_parse_args_defaults(monkeypatch) -> None:
    monkeypatch.delenv("QUILL_ENGINE_LOG_PRESET", raising=False)

    args = _parse_args([])

    assert args.file is None
    assert args.log_preset == "quiet"


def test_parse_args_with_file() -> None:
    args = _parse_args(["main.rs", "--log-preset", "development"])

    assert args.file == "main.rs"
    assert args.log_preset == "development"


def test_normalize_key_maps_textual_names() -> None:
    normalize = QuillEditorApp._normalize_key

    assert normalize(key_event("a", "a")) == ("a", "a", ())
    assert normalize(key_event("enter")) == ("ENTER", None, ())
    assert normalize(key_event("tab", "\t")) == ("TAB", "\t", ())
    assert normalize(key_event("backspace")) == ("BACKSPACE", None, ())
    assert normalize(key_event("ctrl+s")) == ("s", None, ("CTRL",))
    assert normalize(key_event("ctrl+q")) is None
