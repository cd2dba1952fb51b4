from typing import Optional

from rich.panel import Panel

from vite_scaffold.tui.enums import UIStyle


class UISection:
    @staticmethod
    def panel(title: str, body, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None) -> Panel:
        return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))

    @staticmethod
    def bullets(items: list[str]) -> str:
        return "\n".join(f"- {item}" for item in items)
