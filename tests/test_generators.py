from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from modkit.config import PACKAGE_STUBS, ArtifactFlags, GeneratorSettings, ModuleNames
from modkit.errors import GenerationError
from modkit.generators import ModuleGenerator
from modkit.schema import ArtifactKind, ArtifactStatus


def _generator(settings: GeneratorSettings, clock, name: str = "Blog/Posts") -> ModuleGenerator:
    names = ModuleNames.from_name(name, root_namespace=settings.root_namespace)
    return ModuleGenerator(names, settings, clock=clock)


def _module_dir(settings: GeneratorSettings) -> Path:
    return settings.app_path / "Modules" / "Blog" / "Posts"


def _copy_stubs(destination: Path, *, skip: tuple[str, ...] = ()) -> Path:
    destination.mkdir(parents=True)
    for stub in PACKAGE_STUBS.glob("*.stub"):
        if stub.name not in skip:
            shutil.copy(stub, destination / stub.name)
    return destination


def test_model_and_controller(settings: GeneratorSettings, clock):
    report = _generator(settings, clock).generate(ArtifactFlags(model=True, controller=True))
    module = _module_dir(settings)

    model = (module / "Models" / "Post.php").read_text(encoding="utf-8")
    assert "namespace App\\Modules\\Blog\\Posts\\Models;" in model
    assert "class Post extends Model" in model
    assert "protected $table = 'posts';" in model

    controller = (module / "Controllers" / "PostsController.php").read_text(encoding="utf-8")
    assert "namespace App\\Modules\\Blog\\Posts\\Controllers;" in controller
    assert "use App\\Http\\Controllers\\Controller;" in controller
    assert "class PostsController extends Controller" in controller

    routes = (module / "Routes" / "web.php").read_text(encoding="utf-8")
    assert "Route::resource('posts', 'App\\Modules\\Blog\\Posts\\Controllers\\PostsController')" in routes
    assert "['posts' => 'post']" in routes

    assert [result.kind for result in report.results] == [
        ArtifactKind.MODEL,
        ArtifactKind.CONTROLLER,
        ArtifactKind.WEB_ROUTES,
    ]
    assert all(result.status is ArtifactStatus.CREATED for result in report.results)
    assert not (module / "Routes" / "api.php").exists()


def test_api_controller_and_routes(settings: GeneratorSettings, clock):
    _generator(settings, clock).generate(ArtifactFlags(api=True))
    module = _module_dir(settings)

    controller = (module / "Controllers" / "Api" / "PostsController.php").read_text(encoding="utf-8")
    assert "namespace App\\Modules\\Blog\\Posts\\Controllers\\Api;" in controller
    assert "use App\\Modules\\Blog\\Posts\\Models\\Post;" in controller
    assert "public function show(Post $post)" in controller
    assert "Dummy" not in controller

    routes = (module / "Routes" / "api.php").read_text(encoding="utf-8")
    assert (
        "Route::apiResource('posts', 'App\\Modules\\Blog\\Posts\\Controllers\\Api\\PostsController')"
        in routes
    )


def test_generation_is_write_once(settings: GeneratorSettings, clock):
    _generator(settings, clock).generate(ArtifactFlags(model=True, controller=True))
    model_path = _module_dir(settings) / "Models" / "Post.php"
    model_path.write_text("edited", encoding="utf-8")

    report = _generator(settings, clock).generate(ArtifactFlags(model=True, controller=True))

    assert model_path.read_text(encoding="utf-8") == "edited"
    assert report.created == ()
    assert [result.message for result in report.skipped] == [
        "Model already exists!",
        "Controller already exists!",
        "Web Routes already exists!",
    ]
    assert report.ok


def test_routes_are_generated_even_when_controller_exists(settings: GeneratorSettings, clock):
    controller = _module_dir(settings) / "Controllers" / "PostsController.php"
    controller.parent.mkdir(parents=True)
    controller.write_text("existing", encoding="utf-8")

    report = _generator(settings, clock).generate(ArtifactFlags(controller=True))

    assert [result.status for result in report.results] == [ArtifactStatus.EXISTS, ArtifactStatus.CREATED]
    assert (_module_dir(settings) / "Routes" / "web.php").exists()


def test_all_flag_is_the_union_of_individual_flags(tmp_path: Path, clock):
    individual = GeneratorSettings.from_base_path(tmp_path / "one")
    for flag in ArtifactFlags.names():
        _generator(individual, clock).generate(ArtifactFlags(**{flag: True}))

    combined = GeneratorSettings.from_base_path(tmp_path / "all")
    report = _generator(combined, clock).generate(ArtifactFlags.from_options(all=True))

    def tree(root: Path) -> set[Path]:
        return {path.relative_to(root) for path in root.rglob("*") if path.is_file()}

    assert tree(individual.base_path) == tree(combined.base_path)
    paths = [result.path for result in report.results]
    assert len(paths) == len(set(paths)) == 11
    assert report.ok


def test_migration(settings: GeneratorSettings, clock):
    report = _generator(settings, clock).generate(ArtifactFlags(migration=True))

    migration = _module_dir(settings) / "Migrations" / "2024_03_05_143009_create_posts_table.php"
    text = migration.read_text(encoding="utf-8")
    assert "class CreatePostsTable extends Migration" in text
    assert "Schema::create('posts'" in text
    assert report.created[0].kind is ArtifactKind.MIGRATION


def test_existing_migration_is_detected_by_table(settings: GeneratorSettings, clock):
    directory = _module_dir(settings) / "Migrations"
    directory.mkdir(parents=True)
    (directory / "2020_01_01_000000_create_posts_table.php").write_text("old", encoding="utf-8")

    report = _generator(settings, clock).generate(ArtifactFlags(migration=True))

    assert report.skipped[0].message == "Migration already exists!"
    assert sorted(path.name for path in directory.iterdir()) == ["2020_01_01_000000_create_posts_table.php"]


def test_migration_failure_does_not_abort_the_run(project: Path, tmp_path: Path, clock):
    stubs = _copy_stubs(tmp_path / "stubs", skip=("migration.create.stub",))
    settings = GeneratorSettings.from_base_path(project, stubs=stubs, default_stubs=False)

    report = _generator(settings, clock).generate(ArtifactFlags(migration=True, vue=True))

    assert [result.status for result in report.results] == [ArtifactStatus.FAILED, ArtifactStatus.CREATED]
    assert not report.ok
    assert (project / "resources" / "js" / "components" / "Blog" / "Posts.vue").exists()


def test_missing_stub_aborts_but_keeps_written_files(project: Path, tmp_path: Path, clock):
    stubs = _copy_stubs(tmp_path / "stubs", skip=("controller.stub",))
    settings = GeneratorSettings.from_base_path(project, stubs=stubs, default_stubs=False)

    with pytest.raises(GenerationError) as excinfo:
        _generator(settings, clock).generate(ArtifactFlags(model=True, controller=True, view=True))

    report = excinfo.value.report
    assert [result.status for result in report.results] == [ArtifactStatus.CREATED, ArtifactStatus.FAILED]
    assert (_module_dir(settings) / "Models" / "Post.php").exists()
    assert not (_module_dir(settings) / "Controllers").exists()
    assert not (project / "resources" / "views").exists()


def test_keep_going_runs_remaining_artifacts(project: Path, tmp_path: Path, clock):
    stubs = _copy_stubs(tmp_path / "stubs", skip=("controller.stub",))
    settings = GeneratorSettings.from_base_path(project, stubs=stubs, default_stubs=False)

    report = _generator(settings, clock).generate(
        ArtifactFlags(model=True, controller=True, view=True), keep_going=True
    )

    assert len(report.failed) == 1
    assert report.failed[0].kind is ArtifactKind.CONTROLLER
    assert len(report.created) == 5
    assert not (_module_dir(settings) / "Routes" / "web.php").exists()


def test_vue_component_and_views(settings: GeneratorSettings, clock):
    report = _generator(settings, clock).generate(ArtifactFlags(vue=True, view=True))

    component = settings.base_path / "resources" / "js" / "components" / "Blog" / "Posts.vue"
    assert "name: 'Posts'" in component.read_text(encoding="utf-8")

    views = settings.base_path / "resources" / "views" / "Blog" / "Posts"
    assert sorted(path.name for path in views.iterdir()) == [
        "create.blade.php",
        "edit.blade.php",
        "index.blade.php",
        "show.blade.php",
    ]
    assert "Posts: edit" in (views / "edit.blade.php").read_text(encoding="utf-8")
    assert [result.kind for result in report.results].count(ArtifactKind.VIEW) == 4


def test_existing_view_only_skips_that_file(settings: GeneratorSettings, clock):
    views = settings.base_path / "resources" / "views" / "Blog" / "Posts"
    views.mkdir(parents=True)
    (views / "index.blade.php").write_text("custom", encoding="utf-8")

    report = _generator(settings, clock).generate(ArtifactFlags(view=True))

    assert len(report.created) == 3
    assert [result.path for result in report.skipped] == [str(views / "index.blade.php")]
    assert (views / "index.blade.php").read_text(encoding="utf-8") == "custom"


def test_custom_root_namespace(project: Path, clock):
    settings = GeneratorSettings.from_base_path(project, root_namespace="Acme")
    _generator(settings, clock, name="Shop").generate(ArtifactFlags(controller=True))

    controller = settings.app_path / "Modules" / "Shop" / "Controllers" / "ShopController.php"
    text = controller.read_text(encoding="utf-8")
    assert "namespace Acme\\Modules\\Shop\\Controllers;" in text
    assert "use Acme\\Http\\Controllers\\Controller;" in text


def test_each_generate_call_starts_a_new_report(settings: GeneratorSettings, clock):
    generator = _generator(settings, clock)
    first = generator.generate(ArtifactFlags(model=True))
    second = generator.generate(ArtifactFlags(model=True))

    assert [result.status for result in first.results] == [ArtifactStatus.CREATED]
    assert [result.status for result in second.results] == [ArtifactStatus.EXISTS]
    assert generator.report is second


def test_unreplaced_tokens_are_logged(project: Path, tmp_path: Path, clock, caplog: pytest.LogCaptureFixture):
    stubs = tmp_path / "stubs"
    stubs.mkdir()
    (stubs / "model.stub").write_text("class DummyClass extends DummyFoo", encoding="utf-8")
    settings = GeneratorSettings.from_base_path(project, stubs=stubs)

    with caplog.at_level(logging.WARNING, logger="modkit.generators"):
        report = _generator(settings, clock).generate(ArtifactFlags(model=True))

    assert report.created[0].kind is ArtifactKind.MODEL
    assert (_module_dir(settings) / "Models" / "Post.php").read_text(encoding="utf-8") == (
        "class Post extends DummyFoo"
    )
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "DummyFoo" in warnings[0].getMessage()
