"""
Tests for file discovery, loading and dependency manifest parsing.
"""

import json

from reqdoc.sources import (
    CONFIG_FILES,
    DEPENDENCY_FILES,
    MAIN_FILES,
    MODEL_FILES,
    ROUTE_FILES,
    SOURCE_FILES,
    discover_files,
    load_blobs,
    parse_dependencies,
)
from reqdoc.sources.manifests import (
    parse_gemfile,
    parse_go_mod,
    parse_requirements_txt,
)


def _write(root, relative, content=""):
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_main_files_by_stem():
    """Main files are matched by conventional names."""
    assert MAIN_FILES.matches("src/main.py")
    assert MAIN_FILES.matches("index.ts")
    assert MAIN_FILES.matches("cmd/app.go")
    assert not MAIN_FILES.matches("src/helpers.py")
    assert not MAIN_FILES.matches("main.txt")


def test_model_and_route_files_by_directory():
    """Model and route files are matched by any ancestor directory."""
    assert MODEL_FILES.matches("app/models/user.py")
    assert MODEL_FILES.matches("src/domain/orders/order.ts")
    assert not MODEL_FILES.matches("app/services/user.py")
    assert ROUTE_FILES.matches("api/controllers/user_controller.rb")
    assert not ROUTE_FILES.matches("controllers.py")


def test_config_files_need_direct_parent():
    """Config files must sit directly in a config directory."""
    assert CONFIG_FILES.matches("config/app.yaml")
    assert not CONFIG_FILES.matches("settings/.env")
    assert CONFIG_FILES.matches("config/prod.env")
    assert not CONFIG_FILES.matches("config/nested/app.yaml")
    assert not CONFIG_FILES.matches("config/app.py")


def test_source_files_include_headers_and_sql():
    """Source files cover headers and SQL on top of code."""
    assert SOURCE_FILES.matches("include/util.h")
    assert SOURCE_FILES.matches("db/schema.sql")
    assert SOURCE_FILES.matches("Main.JAVA")
    assert not SOURCE_FILES.matches("README.md")


def test_dependency_files_by_name():
    """Manifests are matched by file name or suffix."""
    assert DEPENDENCY_FILES.matches("package.json")
    assert DEPENDENCY_FILES.matches("services/api/requirements.txt")
    assert DEPENDENCY_FILES.matches("src/App/App.csproj")
    assert not DEPENDENCY_FILES.matches("package-lock.json")


def test_discover_skips_ignored_directories(tmp_path):
    """node_modules, build output and hidden directories are never walked."""
    _write(tmp_path, "main.py", "print('hi')")
    _write(tmp_path, "src/app.js", "run()")
    _write(tmp_path, "node_modules/lib/index.js", "x")
    _write(tmp_path, "build/main.py", "x")
    _write(tmp_path, ".git/hooks/main.py", "x")
    _write(tmp_path, ".venv/lib/python3.11/site-packages/app.py", "x")

    assert discover_files(tmp_path, MAIN_FILES) == ["main.py", "src/app.js"]


def test_discover_merges_matchers(tmp_path):
    """Files matched by several matchers appear once, sorted."""
    _write(tmp_path, "b.py", "b")
    _write(tmp_path, "config/settings.json", "{}")
    _write(tmp_path, "a.py", "a")

    assert discover_files(tmp_path, SOURCE_FILES, CONFIG_FILES, SOURCE_FILES) == [
        "a.py",
        "b.py",
        "config/settings.json",
    ]


def test_load_blobs_skips_blank_and_unreadable(tmp_path):
    """Whitespace-only and undecodable files are dropped."""
    _write(tmp_path, "a.py", "x = 1\n")
    _write(tmp_path, "blank.py", "   \n\t\n")
    (tmp_path / "binary.py").write_bytes(b"\xff\xfe\x00\x80")

    blobs = load_blobs(tmp_path, ["a.py", "blank.py", "binary.py", "missing.py"])

    assert [(b.origin, b.text) for b in blobs] == [("a.py", "x = 1\n")]


def test_parse_requirements_txt():
    """Pinned versions, specifiers, bare names, comments and options."""
    content = "\n".join([
        "# comment",
        "requests==2.31.0",
        "flask>=2.0,<3  # web",
        "click",
        "uvicorn[standard]==0.23.0",
        "-r other.txt",
        "pywin32==306; sys_platform == 'win32'",
        "",
    ])

    assert parse_requirements_txt(content) == {
        "requests": "2.31.0",
        "flask": ">=2.0,<3",
        "click": "latest",
        "uvicorn": "0.23.0",
        "pywin32": "306",
    }


def test_parse_gemfile():
    """Gem lines with and without versions."""
    content = "source 'https://rubygems.org'\ngem 'rails', '~> 7.0'\ngem \"puma\"\n"

    assert parse_gemfile(content) == {"rails": "~> 7.0", "puma": "latest"}


def test_parse_go_mod():
    """Single-line and block require directives."""
    content = "\n".join([
        "module example.com/app",
        "go 1.21",
        "require github.com/pkg/errors v0.9.1",
        "require (",
        "    golang.org/x/net v0.17.0 // indirect",
        "    github.com/spf13/cobra v1.8.0",
        ")",
    ])

    assert parse_go_mod(content) == {
        "github.com/pkg/errors": "v0.9.1",
        "golang.org/x/net": "v0.17.0",
        "github.com/spf13/cobra": "v1.8.0",
    }


def test_parse_dependencies_merges_ecosystems(tmp_path):
    """Manifests are grouped by ecosystem and merged."""
    _write(tmp_path, "package.json", json.dumps({
        "dependencies": {"express": "^4.18.0"},
        "devDependencies": {"jest": "^29.0.0"},
    }))
    _write(tmp_path, "web/package.json", json.dumps({"dependencies": {"react": "18.2.0"}}))
    _write(tmp_path, "requirements.txt", "requests==2.31.0\n")
    _write(tmp_path, "Cargo.toml", '[dependencies]\nserde = { version = "1.0" }\nrand = "0.8"\n')
    _write(tmp_path, "pubspec.yaml", "dependencies:\n  http: ^1.1.0\n  flutter:\n    sdk: flutter\n")
    _write(tmp_path, "pom.xml", "<project/>")

    paths = discover_files(tmp_path, DEPENDENCY_FILES)
    dependencies = parse_dependencies(tmp_path, paths)

    assert dependencies == {
        "nodejs": {"express": "^4.18.0", "jest": "^29.0.0", "react": "18.2.0"},
        "python": {"requests": "2.31.0"},
        "rust": {"serde": "1.0", "rand": "0.8"},
        "dart": {"http": "^1.1.0", "flutter": "latest"},
    }


def test_parse_dependencies_skips_broken_manifest(tmp_path, caplog):
    """An unparseable manifest is logged and skipped."""
    _write(tmp_path, "package.json", "{not json")
    _write(tmp_path, "requirements.txt", "click==8.1.7\n")

    with caplog.at_level("WARNING", logger="reqdoc.sources.manifests"):
        dependencies = parse_dependencies(tmp_path, ["package.json", "requirements.txt"])

    assert dependencies == {"python": {"click": "8.1.7"}}
    assert "Could not parse dependencies from package.json" in caplog.text


def test_discover_skips_hidden_files_and_virtualenvs(tmp_path):
    """Dotfiles such as config/.env and .venv trees are never selected."""
    _write(tmp_path, "app.py", "run()")
    _write(tmp_path, ".venv/lib/python3.11/site-packages/requests/api.py", "x")
    _write(tmp_path, ".idea/tools/helper.py", "x")
    _write(tmp_path, "config/.env", "API_KEY=secret\n")
    _write(tmp_path, "src/.hidden.py", "x")

    assert discover_files(tmp_path, SOURCE_FILES, CONFIG_FILES) == ["app.py"]


def test_parse_dependencies_skips_non_mapping_sections(tmp_path, caplog):
    """package.json sections that are not objects are logged and skipped."""
    _write(tmp_path, "package.json", json.dumps({"dependencies": "oops"}))
    _write(tmp_path, "web/package.json", json.dumps({"devDependencies": ["jest"]}))
    _write(tmp_path, "requirements.txt", "click\n")

    with caplog.at_level("WARNING", logger="reqdoc.sources.manifests"):
        dependencies = parse_dependencies(
            tmp_path, ["package.json", "requirements.txt", "web/package.json"]
        )

    assert dependencies == {"python": {"click": "latest"}}
    assert "Could not parse dependencies from package.json" in caplog.text
    assert "Could not parse dependencies from web/package.json" in caplog.text
