#!/usr/bin/env python3
"""
Terminal Rendering
==================
Rich-based tables for the CLI: generated names, token lists and presets.

Usage:
    from namegen.ui import NameTableUI

    ui = NameTableUI()
    ui.show_results(results)
    ui.show_tokens(table)
"""

from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .generator import GenerationResult
from .tokens import CATEGORIES, TokenTable


class NameTableUI:
    """Renders namegen data as rich tables."""

    # Candidates shown per key in the tokens table
    SAMPLE_SIZE = 6

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def results_table(self, results: List[GenerationResult]) -> Table:
        table = Table(box=box.ROUNDED, title="Generated Names")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Pattern", style="cyan")
        table.add_column("Name", style="bold")
        table.add_column("Seed", justify="right", style="dim")

        for i, result in enumerate(results, 1):
            if result.ok:
                name = Text(result.name)
            else:
                name = Text(result.status.value, style="red")
            table.add_row(str(i), Text(result.pattern), name, str(result.seed))
        return table

    def tokens_table(self, tokens: TokenTable) -> Table:
        table = Table(box=box.ROUNDED, title="Token Table")
        table.add_column("Key", style="cyan", justify="center")
        table.add_column("Category")
        table.add_column("Count", justify="right")
        table.add_column("Sample", style="dim")

        for key in sorted(tokens.keys()):
            candidates = tokens.lookup(key)
            sample = ', '.join(candidates[:self.SAMPLE_SIZE])
            if len(candidates) > self.SAMPLE_SIZE:
                sample += ', ...'
            table.add_row(key, CATEGORIES.get(key, ""), str(len(candidates)), sample)
        return table

    def presets_table(self, presets: Dict[str, dict]) -> Table:
        table = Table(box=box.ROUNDED, title="Pattern Presets")
        table.add_column("Preset", style="cyan")
        table.add_column("Pattern", style="bold")
        table.add_column("Description")
        for name, info in presets.items():
            table.add_row(name, Text(info["pattern"]), info["description"])
        return table

    def show_results(self, results: List[GenerationResult]):
        self.console.print(self.results_table(results))

    def show_tokens(self, tokens: TokenTable):
        self.console.print(self.tokens_table(tokens))

    def show_presets(self, presets: Dict[str, dict]):
        self.console.print(self.presets_table(presets))
