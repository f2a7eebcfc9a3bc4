"""UI components module."""
from .step_header import render_step_header
from .receipt_view import render_receipt_view
from .employee_step import render_employee_step
from .investor_step import render_investor_step
from .product_step import render_product_step
from .preview_step import render_preview_step
from .receipts_table import render_receipts_table
from .saved_receipt import render_saved_receipt
from .stats_charts import render_kpis, render_category_chart, render_daily_chart, render_employee_table

__all__ = [
    "render_step_header",
    "render_receipt_view",
    "render_employee_step",
    "render_investor_step",
    "render_product_step",
    "render_preview_step",
    "render_receipts_table",
    "render_saved_receipt",
    "render_kpis",
    "render_category_chart",
    "render_daily_chart",
    "render_employee_table",
]
