"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import DoubanResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("douban-catalog", style="bold green")
    subtitle = Text("豆瓣 • Categorías • Listas • Recomendaciones", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="green", padding=(1, 4)))


def build_items_table(result: DoubanResult, *, title: str = "Douban") -> Table:
    """Crea una tabla Rich con los elementos normalizados."""

    table = Table(title=f"{title} ({len(result.items)})", caption=result.message)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Year", style="magenta")
    table.add_column("Rate", style="green")
    table.add_column("Poster", style="dim", overflow="fold")
    for item in result.items:
        table.add_row(item.id, item.title, item.year or "-", item.rate or "-", item.poster)
    return table
