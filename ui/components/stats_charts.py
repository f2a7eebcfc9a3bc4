"""Dashboard KPI cards and charts."""
from __future__ import annotations
from typing import Any, Dict, List
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from core.utils import format_inr, to_num

BAR_COLOR = "#dc2626"


def summary_kpis(summary: Dict[str, Any]) -> Dict[str, float]:
    """Totals and average ticket size from the summary payload."""
    count = to_num(summary.get("totalReceipts"))
    amount = to_num(summary.get("totalAmount"))
    return {
        "count": count,
        "amount": amount,
        "average": amount / count if count else 0,
    }


def render_kpis(summary: Dict[str, Any]) -> None:
    kpis = summary_kpis(summary)
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Total Receipts", f"{int(kpis['count']):,}", help="Receipts in selected period")
    with col2:
        st.metric("Total Amount", format_inr(kpis["amount"]), help="Investment amount")
    with col3:
        st.metric("Average Ticket", format_inr(kpis["average"]), help="Amount per receipt")


def render_category_chart(by_category: List[Dict[str, Any]]) -> None:
    st.markdown("### 📊 By Category")
    if not by_category:
        st.info("No category data available")
        return

    df = pd.DataFrame(by_category).reindex(columns=["category", "amount"])
    df["amount"] = df["amount"].apply(to_num)
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=df["category"],
        y=df["amount"],
        marker_color=BAR_COLOR,
        text=df["amount"].apply(lambda x: format_inr(x)),
        textposition="auto",
    ))
    fig.update_layout(xaxis_title="Category", yaxis_title="Amount (₹)", height=400)
    st.plotly_chart(fig, use_container_width=True)


def render_daily_chart(by_day: List[Dict[str, Any]]) -> None:
    st.markdown("### 📈 Daily Trend")
    if not by_day:
        st.info("No daily data available")
        return

    df = pd.DataFrame(by_day).reindex(columns=["date", "amount"])
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    df["amount"] = df["amount"].apply(to_num)
    df = df.dropna(subset=["date"]).sort_values("date")

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df["date"],
        y=df["amount"],
        mode="lines+markers",
        line=dict(color=BAR_COLOR, width=3),
        marker=dict(size=8),
        name="Amount",
    ))
    fig.update_layout(xaxis_title="Date", yaxis_title="Amount (₹)", hovermode="x unified", height=400)
    st.plotly_chart(fig, use_container_width=True)


def render_employee_table(summary: Dict[str, Any]) -> None:
    """Per-employee breakdown, present only in admin summaries."""
    rows = summary.get("byEmployee") or []
    if not rows:
        return
    st.markdown("### 👥 By Employee")
    df = pd.DataFrame([
        {
            "Employee": r.get("employeeName", ""),
            "Emp Code": r.get("empCode", ""),
            "Receipts": int(to_num(r.get("receiptCount"))),
            "Amount": format_inr(to_num(r.get("totalAmount"))),
            "Average": format_inr(summary_kpis({"totalReceipts": r.get("receiptCount"), "totalAmount": r.get("totalAmount")})["average"]),
        }
        for r in rows
    ])
    st.dataframe(df, hide_index=True, use_container_width=True)
