from vite_scaffold.tui.renderers import ScaffoldConsoleUI

__all__ = ["ScaffoldConsoleUI"]
