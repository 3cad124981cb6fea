"""
PDF quotation document.

Renders a persisted quotation record (quotation_to_dict output) for the client.
Uses fpdf2 (pure Python, no system dependencies).

Sections:
1. Company header bar (every page)
2. Title, reference number and date
3. Client details
4. Proposal details
5. Cost table, one row per priced line
6. Total, GST and grand total
7. Terms & conditions
8. Company footer with page numbers (every page)

Amounts are printed exactly as stored on the record; nothing is re-priced here.
"""

from datetime import datetime

from fpdf import FPDF

from .config import settings
from .estimator import round_currency
from .sports import sport_display_name

AREA_UNIT = "Sqm"

# (label, width), summing to the 190mm printable width of A4 with 10mm margins
TABLE_COLUMNS = [
    ("S.No.", 12), ("Description", 78), ("Unit", 18), ("Qty", 20), ("Rate", 28), ("Amount", 34),
]

LINE_NOTES = {
    "base": [
        "Excavation in surface not exceeding 30cm depth, disposal up to 50m.",
        "Sub grade preparation with 8-12 tonne power road roller.",
        "Stone aggregate and PCC bed finished to level.",
    ],
    "shed": [
        "Steel truss and pillar structure with purlins and J-bolt base.",
        "Roof sheeting with primer and enamel paint finish.",
    ],
    "flooring": [
        "Multi-layer sports surface system: primer, resurfacer, cushion and top coat.",
        "Line marking as per the standard court layout.",
    ],
    "lighting": [
        "Sports flood light fixtures with poles, wiring and fittings.",
    ],
    "drainage": [
        "Perimeter drainage channel with slope correction across the court area.",
    ],
    "fencing": [
        "Perimeter fencing on MS posts, including gate and fixing.",
    ],
}

TERMS = [
    "Payment: 50% advance, 30% after frame, 20% on completion",
    "Validity: {valid_days} days from date of issue",
    "Completion: 35 days (excluding weather delays)",
    "Transportation charges included",
    "Materials: manufacturer warranty",
    "Workmanship: 1 year guarantee",
]


def _fmt(amount) -> str:
    """Format a number with Indian digit grouping: 12,34,567.00"""
    try:
        value = float(amount)
    except (ValueError, TypeError):
        return "0.00"
    whole, frac = f"{abs(value):.2f}".split(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    return f"{'-' if value < 0 else ''}{whole}.{frac}"


def _fmt_qty(qty) -> str:
    try:
        value = float(qty)
    except (ValueError, TypeError):
        return "-"
    return str(int(value)) if value.is_integer() else f"{value:.2f}"


def _safe(text) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        str(text)
        .replace("\u2022", "-")    # bullet
        .replace("\u2014", " - ")  # em dash
        .replace("\u2013", "-")    # en dash
        .replace("\u201c", '"')    # left double quote
        .replace("\u201d", '"')    # right double quote
        .replace("\u2018", "'")    # left single quote
        .replace("\u2019", "'")    # right single quote
        .replace("\u20b9", "Rs.")  # rupee sign
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


def _label(value: str) -> str:
    return str(value or "").replace("-", " ").replace("_", " ").upper()


def build_line_items(quotation: dict) -> list:
    """
    Table rows for a quotation record, in print order.
    Each row: {"title", "notes", "unit", "qty", "rate", "amount"}. Zero lines are skipped.
    """
    pricing = quotation.get("pricing", {})
    requirements = quotation.get("requirements", {})
    features = requirements.get("additionalFeatures") or {}
    base = requirements.get("base") or {}
    flooring = requirements.get("flooring") or {}
    area = base.get("area") or 0

    rows = []

    def add(title, notes, unit, qty, amount):
        if not amount:
            return
        qty = qty or 1
        rows.append({
            "title": title,
            "notes": notes,
            "unit": unit,
            "qty": qty,
            "rate": amount / qty,
            "amount": amount,
        })

    add(f"BASE CONSTRUCTION ({_label(base.get('type'))})", LINE_NOTES["base"],
        AREA_UNIT, area, pricing.get("baseCost"))

    shed = features.get("shed") or requirements.get("roof") or {}
    shed_type = shed.get("type") or "roof"
    add(f"SHED STRUCTURE ({_label(shed_type)})", LINE_NOTES["shed"],
        AREA_UNIT, shed.get("area") or area, pricing.get("shedCost"))

    add(f"FLOORING ({_label(flooring.get('type'))})", LINE_NOTES["flooring"],
        AREA_UNIT, flooring.get("area") or area, pricing.get("flooringCost"))

    lighting = features.get("lighting") or requirements.get("lighting") or {}
    add(f"LIGHTING ({_label(lighting.get('type'))})", LINE_NOTES["lighting"],
        "Nos", lighting.get("quantity") or 1, pricing.get("lightingCost"))

    add("DRAINAGE SYSTEM", LINE_NOTES["drainage"], AREA_UNIT, area, pricing.get("drainageCost"))

    fencing = features.get("fencing") or {}
    add(f"FENCING ({_label(fencing.get('type'))})", LINE_NOTES["fencing"],
        "Rmt", fencing.get("length") or 1, pricing.get("fencingCost"))

    equipment = requirements.get("equipment") or []
    priced_items = [item for item in equipment if item.get("totalCost")]
    if priced_items:
        for item in priced_items:
            add(_label(item.get("name") or item.get("id") or "Equipment"), [],
                "Nos", item.get("quantity") or 1, item.get("totalCost"))
    else:
        add("SPORTS EQUIPMENT", [], "Set", 1, pricing.get("equipmentCost"))

    legacy = requirements.get("legacyAdditionalFeatures") or []
    priced_legacy = [feature for feature in legacy if feature.get("cost")]
    if priced_legacy:
        for feature in priced_legacy:
            add(_label(feature.get("name") or "Additional feature"), [], "Lot", 1, feature.get("cost"))
    else:
        add("ADDITIONAL FEATURES", [], "Lot", 1, pricing.get("additionalCost"))

    return rows


class QuotationPDF(FPDF):
    """A4 quotation with the company letterhead and footer on every page."""

    def __init__(self, company: dict):
        super().__init__(format="A4")
        self.company = company
        self.set_auto_page_break(auto=True, margin=28)

    def header(self):
        self.set_fill_color(41, 128, 185)
        self.rect(0, 0, self.w, 25, style="F")
        self.set_text_color(255, 255, 255)

        self.set_xy(self.l_margin, 6)
        self.set_font("Helvetica", "B", 16)
        self.cell(0, 8, _safe(self.company.get("name")), align="C")
        self.set_xy(self.l_margin, 14)
        self.set_font("Helvetica", "", 8)
        self.cell(0, 5, _safe(self.company.get("tagline")), align="C")

        self.set_font("Helvetica", "", 7)
        for i, line in enumerate(("phone", "email", "website")):
            self.set_xy(self.l_margin, 6 + i * 4)
            self.cell(0, 4, _safe(self.company.get(line)), align="R")

        self.set_text_color(0, 0, 0)
        self.set_y(32)

    def footer(self):
        self.set_y(-22)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(100, 100, 100)
        self.cell(0, 5, f"Page {self.page_no()}/{{nb}}", align="C")

        self.set_fill_color(41, 128, 185)
        self.rect(0, self.h - 15, self.w, 15, style="F")
        self.set_text_color(255, 255, 255)
        self.set_font("Helvetica", "", 7)
        name = self.company.get("name")
        tagline = self.company.get("tagline")
        address = self.company.get("address")
        self.set_xy(self.l_margin, self.h - 13)
        self.cell(0, 4, _safe(f"{name} - {tagline} | {address}"), align="C")
        contact = " | ".join(
            p for p in (self.company.get("phone"), self.company.get("email"), self.company.get("website")) if p
        )
        self.set_xy(self.l_margin, self.h - 8)
        self.cell(0, 4, _safe(contact), align="C")
        self.set_text_color(0, 0, 0)

    def section_title(self, title):
        self.set_font("Helvetica", "B", 10)
        self.cell(0, 6, title, new_x="LMARGIN", new_y="NEXT")
        self.set_font("Helvetica", "", 9)

    def table_header(self):
        self.set_font("Helvetica", "B", 9)
        self.set_fill_color(240, 240, 240)
        for label, width in TABLE_COLUMNS:
            align = "R" if label in ("Qty", "Rate", "Amount") else "L"
            self.cell(width, 7, label, border="B", fill=True, align=align)
        self.ln()

    def line_item(self, number: int, row: dict):
        widths = [w for _, w in TABLE_COLUMNS]
        # Keep the row and its notes together
        needed = 6 + 3.5 * len(row["notes"]) * 2
        if self.get_y() + needed > self.page_break_trigger:
            self.add_page()
            self.table_header()

        self.set_font("Helvetica", "B", 8)
        self.cell(widths[0], 6, f"{number}.")
        self.cell(widths[1], 6, _safe(row["title"])[:48])
        self.cell(widths[2], 6, row["unit"])
        self.cell(widths[3], 6, _fmt_qty(row["qty"]), align="R")
        self.cell(widths[4], 6, _fmt(row["rate"]), align="R")
        self.cell(widths[5], 6, _fmt(row["amount"]), align="R")
        self.ln()

        self.set_font("Helvetica", "", 7)
        for note in row["notes"]:
            self.set_x(self.l_margin + widths[0])
            self.multi_cell(widths[1], 3.5, _safe(note), new_x="LMARGIN", new_y="NEXT")

        self.set_draw_color(200, 200, 200)
        y = self.get_y() + 1
        self.line(self.l_margin + widths[0], y, self.w - self.r_margin, y)
        self.set_draw_color(0, 0, 0)
        self.ln(3)

    def total_row(self, label, amount, bold=True):
        self.set_font("Helvetica", "B" if bold else "", 10)
        self.cell(128, 7, "")
        self.cell(28, 7, label, align="R")
        self.cell(34, 7, _fmt(amount), align="R")
        self.ln()


def company_profile() -> dict:
    return {
        "name": settings.COMPANY_NAME,
        "tagline": settings.COMPANY_TAGLINE,
        "address": settings.COMPANY_ADDRESS,
        "phone": settings.COMPANY_PHONE,
        "email": settings.COMPANY_EMAIL,
        "website": settings.COMPANY_WEBSITE,
    }


def generate_quotation_pdf(quotation: dict, company: dict = None) -> bytes:
    """
    Generate the client-facing PDF for a quotation record.

    Args:
        quotation: quotation_to_dict() output
        company: letterhead overrides (name, tagline, address, phone, email, website)

    Returns:
        PDF bytes
    """
    profile = company_profile()
    profile.update({k: v for k, v in (company or {}).items() if v})

    pdf = QuotationPDF(profile)
    pdf.alias_nb_pages()
    pdf.add_page()

    # ── Title ──
    pdf.set_font("Helvetica", "B", 12)
    pdf.cell(0, 8, "QUOTATION FOR SPORTS COURT CONSTRUCTION", align="C", new_x="LMARGIN", new_y="NEXT")

    number = quotation.get("quotationNumber") or "-"
    created = quotation.get("createdAt") or ""
    try:
        date_str = datetime.fromisoformat(created.replace("Z", "+00:00")).strftime("%d/%m/%Y")
    except (ValueError, AttributeError):
        date_str = datetime.utcnow().strftime("%d/%m/%Y")

    pdf.set_font("Helvetica", "", 9)
    pdf.cell(95, 5, f"Ref. No: {_safe(number)}")
    pdf.cell(95, 5, f"Date: {date_str}", align="R", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(5)

    # ── Client ──
    client = quotation.get("clientInfo", {})
    pdf.section_title("CLIENT DETAILS")
    for label in ("name", "email", "phone"):
        pdf.cell(0, 4.5, _safe(f"{label.title()}: {client.get(label) or 'N/A'}"), new_x="LMARGIN", new_y="NEXT")
    pdf.multi_cell(150, 4.5, _safe(f"Address: {client.get('address') or 'N/A'}"), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(5)

    # ── Proposal ──
    project = quotation.get("projectInfo", {})
    requirements = quotation.get("requirements", {})
    sport = project.get("sport") or project.get("gameType") or ""
    area = (requirements.get("base") or {}).get("area")
    pdf.section_title("PROPOSAL DETAILS")
    pdf.cell(0, 4.5, _safe(
        f"Proposal for {sport_display_name(sport).upper() or 'MULTI-SPORT'} "
        f"({_label(project.get('courtType') or 'outdoor')})"
    ), new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 4.5, _safe(
        f"Construction: {_label(project.get('constructionType'))} | "
        f"Court size: {_label(project.get('courtSize'))} | "
        f"Court area: {_fmt_qty(area)} {AREA_UNIT}"
    ), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(5)

    # ── Cost table ──
    pdf.table_header()
    pdf.ln(1)
    for index, row in enumerate(build_line_items(quotation), start=1):
        pdf.line_item(index, row)

    # ── Totals ──
    subtotal = (quotation.get("pricing") or {}).get("totalCost") or 0
    gst = round_currency(subtotal * settings.GST_RATE)
    if pdf.get_y() + 30 > pdf.page_break_trigger:
        pdf.add_page()
    pdf.total_row("Total", subtotal)
    pdf.total_row(f"GST@{settings.GST_RATE * 100:g}%", gst, bold=False)
    pdf.set_draw_color(0, 0, 0)
    pdf.line(pdf.w - pdf.r_margin - 62, pdf.get_y(), pdf.w - pdf.r_margin, pdf.get_y())
    pdf.total_row("Grand Total", subtotal + gst)
    pdf.ln(8)

    # ── Terms ──
    pdf.section_title("TERMS & CONDITIONS")
    pdf.set_font("Helvetica", "", 8)
    for term in TERMS:
        pdf.cell(0, 4.5, _safe(f"- {term.format(valid_days=settings.QUOTE_VALID_DAYS)}"),
                 new_x="LMARGIN", new_y="NEXT")

    return bytes(pdf.output())
