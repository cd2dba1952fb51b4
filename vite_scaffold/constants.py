from typing import Final


SOURCE_DIRNAME: Final[str] = "src"
MANIFEST_FILENAME: Final[str] = "package.json"

SCAFFOLD_FOLDERS: Final[tuple[str, ...]] = (
    "Layout",
    "Components",
    "Pages",
)
LAYOUT_FILENAME: Final[str] = "Layout.jsx"

DEFAULT_ENTRY_FILENAME: Final[str] = "main.jsx"
DEFAULT_STYLESHEET_FILENAME: Final[str] = "index.css"
TAILWIND_CONFIG_FILENAME: Final[str] = "tailwind.config.js"

CONFIG_DIRNAME: Final[str] = "vite-scaffold"
CONFIG_FILENAME: Final[str] = "config.yaml"
PROJECT_CONFIG_FILENAME: Final[str] = "vite-scaffold.yaml"
