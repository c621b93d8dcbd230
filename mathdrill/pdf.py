# pdf.py
# ------------------------------------------------------------
# レイアウト木 → PDF（reportlab）
# ・表：A4 横／たし算：A4 縦
# ・上部に 名前（左）／タイトル（中央）／レベル（右）
# ・ブロックは左から右へ並べ、入らなければ次の段、
#   段が入らなければ改ページ（見出しも再描画）
# ------------------------------------------------------------

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas as pdf_canvas

from .config import Settings, get_settings
from .errors import RenderError
from .layout import (
    Block,
    DivisionRow,
    Header,
    SumBlock,
    TableBlock,
    WorksheetDocument,
)
from .models import OperationMode

logger = logging.getLogger(__name__)

FALLBACK_FONT_NAME = "Helvetica"
HEADER_GAP = 20  # 見出しと本文の間（pt）
CELL_PADDING = 4
QUESTION_WIDTH_RATIO = 0.45  # わり算：問題文の幅（Q= の位置）


# ====== フォント ======

@lru_cache(maxsize=None)
def register_font(font_path: str, font_name: str) -> str:
    """TTF を登録して使うフォント名を返す。無ければ Helvetica。"""
    if not os.path.isfile(font_path):
        logger.warning("font not found: %s, falling back to %s", font_path, FALLBACK_FONT_NAME)
        return FALLBACK_FONT_NAME
    try:
        pdfmetrics.registerFont(TTFont(font_name, font_path))
    except (TTFError, OSError):
        logger.warning("font could not be loaded: %s, falling back to %s", font_path, FALLBACK_FONT_NAME)
        return FALLBACK_FONT_NAME
    return font_name


# ====== 配置計算 ======

@dataclass(frozen=True)
class Placement:
    block: Block
    x: float
    width: float


@dataclass(frozen=True)
class Line:
    top: float
    height: float
    placements: Tuple[Placement, ...]


@dataclass(frozen=True)
class PageGeometry:
    width: float
    height: float
    margin: float
    header_height: float

    @property
    def content_left(self) -> float:
        return self.margin

    @property
    def content_right(self) -> float:
        return self.width - self.margin

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def content_top(self) -> float:
        return self.height - self.margin - self.header_height

    @property
    def content_bottom(self) -> float:
        return self.margin


def page_geometry(document: WorksheetDocument, settings: Settings) -> PageGeometry:
    width, height = landscape(A4) if document.landscape else A4
    return PageGeometry(
        width=width,
        height=height,
        margin=settings.page_margin_mm * mm,
        header_height=settings.header_font_size + HEADER_GAP,
    )


def block_width(block: Block, geometry: PageGeometry, settings: Settings) -> float:
    if isinstance(block, SumBlock):
        return geometry.content_width * settings.sum_block_width_ratio
    if block.operation is OperationMode.DIVISION:
        return settings.division_block_width_mm * mm
    return settings.multiplication_block_width_mm * mm


def row_count(block: Block) -> int:
    if isinstance(block, SumBlock):
        # 番号の帯 + 数の並び + 答えの枠
        return len(block.operands) + 2
    return len(block.rows)


def row_height(block: Block, geometry: PageGeometry, settings: Settings) -> float:
    """1 行の高さ。1 ページに入りきらないブロックは行の間隔を詰める。"""
    fit = (geometry.content_top - geometry.content_bottom - CELL_PADDING * 2) / row_count(block)
    return min(settings.row_height_mm * mm, fit)


def block_height(block: Block, geometry: PageGeometry, settings: Settings) -> float:
    return row_height(block, geometry, settings) * row_count(block) + CELL_PADDING * 2


def plan_pages(
    blocks: Tuple[Block, ...],
    geometry: PageGeometry,
    settings: Settings,
) -> List[List[Line]]:
    """ブロックを段・ページに割り付ける（描画はしない）"""
    gap = settings.block_gap_mm * mm
    pages: List[List[Line]] = [[]]
    current: List[Placement] = []
    top = geometry.content_top
    x = geometry.content_left
    line_h = 0.0

    def close_line() -> None:
        nonlocal top, x, line_h, current
        if not current:
            return
        if top - line_h < geometry.content_bottom and pages[-1]:
            pages.append([])
            top = geometry.content_top
        pages[-1].append(Line(top=top, height=line_h, placements=tuple(current)))
        top -= line_h + gap
        x = geometry.content_left
        line_h = 0.0
        current = []

    for block in blocks:
        w = block_width(block, geometry, settings)
        h = block_height(block, geometry, settings)
        if current and x + w > geometry.content_right + 0.01:
            close_line()
        current.append(Placement(block=block, x=x, width=w))
        x += w + gap
        line_h = max(line_h, h)
    close_line()
    return pages


# ====== 文字サイズ ======

def fit_font_size(texts: Iterable[Tuple[str, float]], font: str, size: float) -> float:
    """(文字列, 使える幅) がすべて収まるよう size を縮める"""
    fitted = size
    for text, available in texts:
        width = pdfmetrics.stringWidth(text, font, size)
        if width > available > 0:
            fitted = min(fitted, size * available / width)
    return fitted


def row_font_size(row_h: float, settings: Settings) -> float:
    # 行を詰めたときは文字も同じ割合で小さくする
    return settings.body_font_size * min(1.0, row_h / (settings.row_height_mm * mm))


def table_font_size(block: TableBlock, width: float, row_h: float, font: str, settings: Settings) -> float:
    box_w = settings.answer_box_width_mm * mm
    texts: List[Tuple[str, float]] = []
    for row in block.rows:
        if isinstance(row, DivisionRow):
            texts.append((row.question, width * QUESTION_WIDTH_RATIO - CELL_PADDING - 4))
            texts.extend((answer, box_w - 4) for answer in (row.quotient, row.remainder))
        else:
            texts.append((row.text(), width - CELL_PADDING * 2))
    return fit_font_size(texts, font, row_font_size(row_h, settings))


def sum_font_size(block: SumBlock, width: float, row_h: float, font: str, settings: Settings) -> float:
    texts = [(t, width - CELL_PADDING * 2) for t in (*block.operands, block.total, str(block.index))]
    return fit_font_size(texts, font, row_font_size(row_h, settings))


# ====== 描画 ======

def draw_header(c: pdf_canvas.Canvas, header: Header, geometry: PageGeometry, font: str, size: int) -> None:
    y = geometry.height - geometry.margin - size
    c.setFillColor(colors.black)
    c.setFont(font, size)
    c.drawString(geometry.content_left, y, header.name)
    c.drawCentredString(geometry.width / 2, y, header.title)
    c.drawRightString(geometry.content_right, y, header.level)


def draw_answer_box(c: pdf_canvas.Canvas, x: float, baseline: float, width: float, text: str, size: float) -> None:
    c.rect(x, baseline - size * 0.3, width, size * 1.3, stroke=1, fill=0)
    if text:
        c.drawCentredString(x + width / 2, baseline, text)


def draw_table_block(
    c: pdf_canvas.Canvas,
    block: TableBlock,
    x: float,
    top: float,
    width: float,
    row_h: float,
    font: str,
    settings: Settings,
) -> None:
    size = table_font_size(block, width, row_h, font, settings)
    box_w = settings.answer_box_width_mm * mm
    height = row_h * len(block.rows) + CELL_PADDING * 2
    c.setStrokeColor(colors.black)
    c.rect(x, top - height, width, height, stroke=1, fill=0)
    c.setFont(font, size)
    for i, row in enumerate(block.rows):
        baseline = top - CELL_PADDING - row_h * i - (row_h + size) / 2 + size * 0.2
        left = x + CELL_PADDING
        c.setFillColor(colors.black)
        c.drawString(left, baseline, row.question)
        if isinstance(row, DivisionRow):
            q_x = x + width * QUESTION_WIDTH_RATIO
            c.drawString(q_x, baseline, "Q=")
            q_x += pdfmetrics.stringWidth("Q=", font, size) + 2
            draw_answer_box(c, q_x, baseline, box_w, row.quotient, size)
            r_x = q_x + box_w + 6
            c.drawString(r_x, baseline, "R=")
            r_x += pdfmetrics.stringWidth("R=", font, size) + 2
            draw_answer_box(c, r_x, baseline, box_w, row.remainder, size)
        elif row.product:
            c.drawString(left + pdfmetrics.stringWidth(row.question + " ", font, size), baseline, row.product)


def draw_sum_block(
    c: pdf_canvas.Canvas,
    block: SumBlock,
    x: float,
    top: float,
    width: float,
    height: float,
    row_h: float,
    font: str,
    settings: Settings,
) -> None:
    size = sum_font_size(block, width, row_h, font, settings)
    bottom = top - height
    c.setStrokeColor(colors.black)
    c.rect(x, bottom, width, height, stroke=1, fill=0)

    # 番号の帯（黒地に白文字）
    c.setFillColor(colors.black)
    c.rect(x, top - row_h, width, row_h, stroke=0, fill=1)
    c.setFillColor(colors.white)
    c.setFont(font, size)
    c.drawCentredString(x + width / 2, top - row_h + (row_h - size) / 2 + size * 0.2, str(block.index))

    # 数は右寄せ（青）
    c.setFillColor(colors.blue)
    for i, operand in enumerate(block.operands):
        baseline = top - row_h * (i + 2) + (row_h - size) / 2 + size * 0.2
        c.drawRightString(x + width - CELL_PADDING, baseline, operand)

    # 答えの枠は下端に固定（緑）
    c.setFillColor(colors.black)
    c.rect(x, bottom, width, row_h, stroke=1, fill=0)
    if block.total:
        c.setFillColor(colors.green)
        c.drawCentredString(x + width / 2, bottom + (row_h - size) / 2 + size * 0.2, block.total)


def draw_block(
    c: pdf_canvas.Canvas,
    placement: Placement,
    line: Line,
    geometry: PageGeometry,
    font: str,
    settings: Settings,
) -> None:
    block = placement.block
    row_h = row_height(block, geometry, settings)
    if isinstance(block, SumBlock):
        # 同じ段のたし算は高さをそろえる
        draw_sum_block(c, block, placement.x, line.top, placement.width, line.height, row_h, font, settings)
    else:
        draw_table_block(c, block, placement.x, line.top, placement.width, row_h, font, settings)


def render_pdf(document: WorksheetDocument, settings: Optional[Settings] = None) -> bytes:
    settings = settings or get_settings()
    geometry = page_geometry(document, settings)
    font = register_font(settings.font_path, settings.font_name)
    pages = plan_pages(document.blocks, geometry, settings)

    buf = io.BytesIO()
    try:
        c = pdf_canvas.Canvas(buf, pagesize=(geometry.width, geometry.height))
        c.setTitle(document.header.title)
        c.setAuthor(document.header.name)
        for lines in pages:
            draw_header(c, document.header, geometry, font, settings.header_font_size)
            for line in lines:
                for placement in line.placements:
                    draw_block(c, placement, line, geometry, font, settings)
            c.showPage()
        c.save()
    except Exception as exc:
        logger.exception("failed to render %s", document.filename)
        raise RenderError(f"failed to render {document.filename}: {exc}") from exc

    pdf_bytes = buf.getvalue()
    buf.close()
    logger.debug("rendered %s: %d page(s), %d bytes", document.filename, len(pages), len(pdf_bytes))
    return pdf_bytes
