from __future__ import annotations

from pathlib import Path

import pytest

from modkit.template import StubRenderer, TemplateNotFoundError


@pytest.fixture()
def renderer() -> StubRenderer:
    return StubRenderer()


def test_render_string_replaces_every_occurrence(renderer: StubRenderer):
    stub = "class DummyClass extends Base {} // DummyClass"
    assert renderer.render_string(stub, {"DummyClass": "PostsController"}) == (
        "class PostsController extends Base {} // PostsController"
    )


def test_longer_tokens_win_over_their_prefixes(renderer: StubRenderer):
    stub = "use DummyRootNamespaceHttp\\Controller; namespace DummyNamespace;"
    rendered = renderer.render_string(
        stub, {"DummyNamespace": "App\\Modules\\Posts", "DummyRootNamespace": "App\\"}
    )
    assert rendered == "use App\\Http\\Controller; namespace App\\Modules\\Posts;"


def test_substituted_values_are_not_rescanned(renderer: StubRenderer):
    rendered = renderer.render_string(
        "DummyClass DummyModelClass", {"DummyClass": "DummyModelClass", "DummyModelClass": "Post"}
    )
    assert rendered == "DummyModelClass Post"


def test_render_string_without_replacements(renderer: StubRenderer):
    assert renderer.render_string("DummyClass", {}) == "DummyClass"
    assert renderer.render_string("DummyClass", {"": "ignored"}) == "DummyClass"


def test_render_file_writes_target(tmp_path: Path, renderer: StubRenderer):
    stub_path = tmp_path / "model.stub"
    stub_path.write_text("class DummyClass", encoding="utf-8")
    target = tmp_path / "out" / "Post.php"

    rendered = renderer.render_file(stub_path, {"DummyClass": "Post"}, target=target)

    assert rendered == "class Post"
    assert target.read_text(encoding="utf-8") == "class Post"


def test_render_file_missing_stub(tmp_path: Path, renderer: StubRenderer):
    with pytest.raises(TemplateNotFoundError):
        renderer.render_file(tmp_path / "missing.stub", {})

    with pytest.raises(FileNotFoundError):
        renderer.render_file(tmp_path / "missing.stub", {})


def test_leftover_tokens(renderer: StubRenderer):
    text = "class Post extends DummyBase implements DummyContract, DummyBase"
    assert renderer.leftover_tokens(text) == ["DummyBase", "DummyContract"]
    assert renderer.leftover_tokens("class Post") == []
