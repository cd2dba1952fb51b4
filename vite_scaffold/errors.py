from pathlib import Path


class ScaffoldError(Exception):
    """Base user-facing application error."""


class NotAProjectRootError(ScaffoldError):
    def __init__(self, root: Path, marker: str) -> None:
        self.root = root
        self.marker = marker
        super().__init__(
            f"Couldn't find '{marker}' folder in {root}. "
            "Make sure you're in the root of a Vite project."
        )


class UnknownOptionError(ScaffoldError):
    def __init__(self, names: list[str]) -> None:
        self.names = names
        super().__init__(f"Unknown option(s): {', '.join(names)}")


class InvalidPackageNameError(ScaffoldError):
    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Invalid package name {name!r} ({detail})")


class PlanCycleError(ScaffoldError):
    def __init__(self, action_ids: list[str]) -> None:
        self.action_ids = action_ids
        super().__init__(f"Dependency cycle between actions: {', '.join(action_ids)}")


class UnknownDependencyError(ScaffoldError):
    def __init__(self, action_id: str, dependency: str) -> None:
        self.action_id = action_id
        self.dependency = dependency
        super().__init__(f"Action {action_id!r} depends on unknown action {dependency!r}")


class WorkspaceUnavailableError(ScaffoldError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Workspace unavailable ({detail}): {path}")


class ConfigError(ScaffoldError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class InvalidConfigFormatError(ConfigError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid YAML format ({detail})")


class InvalidConfigSchemaError(ConfigError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class UnreadableConfigError(ConfigError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Cannot read config ({detail})")
