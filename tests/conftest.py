import json
import sys
from pathlib import Path
from typing import Any, Sequence

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()

from vite_scaffold.commands import package_base_name  # noqa: E402
from vite_scaffold.executor import ProcessResult  # noqa: E402


class FakeRunner:
    """Stands in for the package manager: records argv and mimics its effects."""

    def __init__(self, fail_on: Sequence[str] = (), returncode: int = 1) -> None:
        self.fail_on = set(fail_on)
        self.returncode = returncode
        self.calls: list[tuple[str, ...]] = []

    def run(self, argv: Sequence[str], cwd: Path) -> ProcessResult:
        argv = tuple(argv)
        self.calls.append(argv)
        if any(token in self.fail_on for token in argv):
            return ProcessResult(returncode=self.returncode, output="npm ERR! code E404")

        if "init" in argv:
            (cwd / "tailwind.config.js").write_text("module.exports = {}\n", encoding="utf-8")
            return ProcessResult(returncode=0)

        manifest_path = cwd / "package.json"
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        section = "devDependencies" if ("-D" in argv or "-d" in argv) else "dependencies"
        packages = [item for item in argv[2:] if not item.startswith("-")]
        for name in packages:
            manifest.setdefault(section, {})[package_base_name(name)] = "^1.0.0"
        manifest_path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
        return ProcessResult(returncode=0, output="added 1 package")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "my-app"
    (root / "src").mkdir(parents=True)
    (root / "package.json").write_text(
        json.dumps({"name": "my-app", "dependencies": {"react": "^18.2.0"}}),
        encoding="utf-8",
    )
    (root / "src" / "main.jsx").write_text(
        "ReactDOM.createRoot(document.getElementById('root')).render(<App />);\n",
        encoding="utf-8",
    )
    (root / "src" / "index.css").write_text("body { margin: 0; }\n", encoding="utf-8")
    return root


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def write_yaml():
    def _write(path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    return _write


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("XDG_CONFIG_HOME", str(tmp_path / ".config"))
            env.setdefault("COLUMNS", "200")
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()


@pytest.fixture
def failing_runner():
    def _make(*tokens: str, returncode: int = 1) -> FakeRunner:
        return FakeRunner(fail_on=tokens, returncode=returncode)

    return _make
