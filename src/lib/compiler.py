"""
Compiler for monthly summary reports

Transforms a MonthlySummary and an optional AI analysis into a standalone
HTML report.
"""

import html
import shutil
from typing import List, Dict, Optional, Any
from pathlib import Path

from ..config import appsettings
from ..models.blocks import Block
from ..models.summary import AIAnalysis, MonthlySummary, CategorySummary
from .formatter import markdown_format
from .renderers import RendererRegistry
from .money import amount_format, balance_tone, transactions_label, categoryLink_make
from .log import LOG
from .theme import Theme


class Compiler:
    """
    Compiles a monthly summary to a standalone HTML report

    Responsibilities:
    - Render totals cards and the per-category breakdown
    - Format the AI analysis text into blocks and render them
    - Inject CSS
    - Copy runtime assets
    - Generate final output
    """

    def __init__(
        self,
        summary: MonthlySummary,
        output_dir: str,
        assets_dir: str,
        analysis: Optional[AIAnalysis] = None,
        theme_name: Optional[str] = None,
        themes_dir: Optional[str] = None,
    ) -> None:
        """
        Initialize compiler

        Args:
            summary: Monthly summary to render
            output_dir: Directory for compiled output
            assets_dir: Directory containing runtime assets (css/html)
            analysis: AI analysis for the same month, if any
            theme_name: Name of theme to use (default: settings.default_theme)
            themes_dir: Directory holding themes (default: packaged themes)
        """
        self.summary = summary
        self.analysis = analysis
        self.output_dir = Path(output_dir)
        self.assets_dir = Path(assets_dir)
        self.renderers = RendererRegistry()

        self.theme = Theme(theme_name or appsettings.default_theme, Path(themes_dir) if themes_dir else None)
        LOG(f"Loaded theme: {self.theme.name}", level=2)

        self.blocks: List[Block] = []

    def compile(self) -> Dict[str, Any]:
        """
        Compile summary to HTML report

        Returns:
            dict with compilation results and statistics
        """
        LOG("Starting compilation...", level=2)

        self.output_dir.mkdir(parents=True, exist_ok=True)

        sections = [self.totals_generate(), self.categories_generate()]
        if self.analysis is not None and self.analysis.analysis.strip():
            sections.append(self.analysisCard_generate(self.analysis.analysis))

        full_html = self.htmlDocument_build('\n'.join(sections))

        output_file = self.output_dir / appsettings.report_filename
        output_file.write_text(full_html, encoding='utf-8')
        LOG(f"Wrote {output_file}", level=2)

        self.assets_copy()

        return {
            'status': True,
            'output_file': str(output_file),
            'block_count': len(self.blocks),
            'category_count': len(self.summary.categories),
        }

    def analysis_compile(self, text: str) -> str:
        """
        Format analysis text and render its blocks to an HTML fragment

        Args:
            text: Raw analysis text (markdown subset)

        Returns:
            HTML for all blocks, one per line
        """
        self.blocks = markdown_format(text)
        LOG(f"Formatted analysis into {len(self.blocks)} blocks", level=3)
        return '\n'.join(self.renderers.node_render(block, self) for block in self.blocks)

    def analysisCard_generate(self, text: str) -> str:
        """Wrap compiled analysis in the "Analiza AI" card"""
        label = html.escape(self.theme.config_get('labels.analysis', 'Analiza AI'))
        content = self.analysis_compile(text)
        return f"""<section class="analysis-card" aria-label="{label}">
    <h2 class="analysis-title">{label}</h2>
    <div class="analysis-content">
{content}
    </div>
</section>"""

    def card_generate(self, label_key: str, default_label: str, value: Any, tone: str) -> str:
        """Generate one totals card"""
        label = html.escape(self.theme.config_get(f'labels.{label_key}', default_label))
        return (
            f'<div class="summary-card {label_key} tone-{tone}">'
            f'<span class="summary-label">{label}</span>'
            f'<span class="summary-value">{html.escape(amount_format(value))}</span>'
            f'</div>'
        )

    def totals_generate(self) -> str:
        """Generate income / expenses / balance cards"""
        summary = self.summary
        cards = [
            self.card_generate('income', 'Przychody', summary.total_income, 'positive'),
            self.card_generate('expenses', 'Wydatki', summary.total_expenses, 'negative'),
            self.card_generate('balance', 'Saldo', summary.balance, balance_tone(summary.balance)),
        ]
        return '<section class="summary-totals">\n    ' + '\n    '.join(cards) + '\n</section>'

    def categoryRow_generate(self, category: CategorySummary) -> str:
        """Generate a linked row for one category"""
        name = html.escape(category.category_name)
        href = html.escape(categoryLink_make(self.summary.month, category.category_id))
        balance = amount_format(category.balance)
        count_label = transactions_label(category.transaction_count)
        aria = html.escape(
            f"Kategoria {category.category_name}, saldo {balance}, {count_label}. "
            f"Kliknij, aby zobaczyć transakcje."
        )
        return f"""<a class="category-row" href="{href}" aria-label="{aria}">
    <div class="category-info">
        <span class="category-name">{name}</span>
        <span class="category-count">{html.escape(count_label)}</span>
    </div>
    <div class="category-amounts">
        <span class="amount-income">+{html.escape(amount_format(category.income))}</span>
        <span class="amount-expense">-{html.escape(amount_format(category.expenses))}</span>
        <span class="category-balance tone-{balance_tone(category.balance)}">{html.escape(balance)}</span>
    </div>
</a>"""

    def categories_generate(self) -> str:
        """Generate the category list, or the empty state when there are none"""
        if not self.summary.categories:
            empty = self.theme.config_get('labels.empty', 'Brak transakcji w miesiącu')
            return f'<section class="empty-state"><p>{html.escape(f"{empty} {self.summary.month}")}</p></section>'

        rows = '\n'.join(self.categoryRow_generate(c) for c in self.summary.categories)
        return f'<section class="categories-list">\n{rows}\n</section>'

    def htmlDocument_build(self, content: str) -> str:
        """
        Build complete HTML document with head and header

        Args:
            content: Compiled report sections

        Returns:
            Complete HTML document
        """
        head_html = self.template_load('head.html')
        title = html.escape(appsettings.reportTitle_make(self.summary.month))

        return f"""<!DOCTYPE html>
<html lang="pl">
{head_html}    <title>{title}</title>
</head>
<body>
    <main class="report">
        <header><h1>{title}</h1></header>
{content}
    </main>
</body>
</html>"""

    def template_load(self, filename: str) -> str:
        """Load HTML template file"""
        template_path = self.assets_dir / 'html' / filename
        if template_path.exists():
            return template_path.read_text(encoding='utf-8')
        LOG(f"Warning: Template {filename} not found", level=2)
        return "<head>\n    <meta charset=\"utf-8\">\n"

    def assets_copy(self) -> None:
        """Copy CSS assets and theme files to output directory"""
        src = self.assets_dir / 'css'
        if src.exists():
            shutil.copytree(src, self.output_dir / 'css', dirs_exist_ok=True)
            LOG("Copied css/ to output", level=3)

        theme_css_path = self.theme.cssPath_get()
        if theme_css_path:
            dst_css = self.output_dir / "css" / "theme.css"
            dst_css.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(theme_css_path, dst_css)
            LOG(f"Copied theme CSS: {self.theme.name}", level=2)

        theme_assets_dir = self.theme.assetsDir_get()
        if theme_assets_dir:
            shutil.copytree(theme_assets_dir, self.output_dir / "theme-assets", dirs_exist_ok=True)
            LOG(f"Copied theme assets: {theme_assets_dir}", level=3)
