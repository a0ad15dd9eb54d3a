"""
PaisaWise - Streamlit Interface
Investing and budgeting dashboard for Indian investors
"""
import logging
import os
import streamlit as st
import sys
from datetime import date, timedelta
from pathlib import Path
import httpx
import plotly.express as px
import plotly.graph_objects as go
import pandas as pd

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.schemas import (
    FormValidationError,
    GoalCategory,
    GoalPriority,
    IncomeSource,
    ReminderType,
)
from tools.budget_tracker import BudgetTracker, DEFAULT_CATEGORIES, summarize_budget
from tools.bill_splitter import YOU, BillSplitter, SplitLedger, SplitMethod
from tools.financial_calculator import BasicCalculator, FinancialCalculator
from tools.formatting import format_fund_date, format_inr
from tools.fund_catalog import (
    DURATIONS,
    FUND_CATEGORIES,
    MAX_COMPARE,
    RISK_LEVELS,
    FundCatalog,
    FundComparison,
)
from tools.goal_planner import GoalPlanner
from tools.knowledge_base import KnowledgeBase
from tools.mutual_funds_api import MutualFundsAPI
from tools.portfolio import PERIODS, PortfolioTracker
from tools.reminder_calendar import TYPE_LABELS, ReminderCalendar, next_month, previous_month
from tools.risk_analyzer import RiskAnalyzer
from tools.sample_data import load_sample_data

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)
logger = logging.getLogger("paisawise.ui")

st.set_page_config(
    page_title="PaisaWise | Invest, Budget, Plan",
    page_icon="₹",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main .block-container {
        padding-top: 2rem;
        padding-bottom: 2rem;
    }
    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    [data-testid="stMetricValue"] {
        font-size: 1.6rem;
        font-weight: 700;
    }
    .stTabs [data-baseweb="tab-list"] {
        gap: 8px;
    }
    .stTabs [data-baseweb="tab"] {
        height: 48px;
        padding: 10px 18px;
        border-radius: 8px 8px 0 0;
        font-weight: 600;
    }
    .calendar-cell {
        border-radius: 8px;
        padding: 6px;
        min-height: 64px;
        border: 1px solid #e5e7eb;
    }
    .calendar-today {
        background-color: #4f46e5;
        color: white;
    }
</style>
""", unsafe_allow_html=True)

EVENT_COLORS = {
    ReminderType.SIP: "#4f46e5",
    ReminderType.GOAL: "#16a34a",
    ReminderType.TIP: "#f59e0b",
    ReminderType.REMINDER: "#64748b",
}

HEALTH_COLORS = {"healthy": "🟢", "warning": "🟠", "danger": "🔴"}


# Initialize session state
today = date.today()
if "budget" not in st.session_state:
    st.session_state.budget = BudgetTracker.with_sample_data(today)
if "ledger" not in st.session_state:
    st.session_state.ledger = SplitLedger.with_sample_data()
if "splitter" not in st.session_state:
    st.session_state.splitter = BillSplitter()
if "goals" not in st.session_state:
    st.session_state.goals = GoalPlanner.with_sample_data(today)
if "calendar" not in st.session_state:
    st.session_state.calendar = ReminderCalendar.with_sample_data(today)
if "view_month" not in st.session_state:
    st.session_state.view_month = (today.year, today.month)
if "catalog" not in st.session_state:
    st.session_state.catalog = FundCatalog.with_sample_data()
if "comparison" not in st.session_state:
    st.session_state.comparison = None
if "keypad" not in st.session_state:
    st.session_state.keypad = BasicCalculator()
if "portfolio" not in st.session_state:
    st.session_state.portfolio = PortfolioTracker.with_sample_data()
if "knowledge" not in st.session_state:
    st.session_state.knowledge = KnowledgeBase.with_sample_data()
if "messages" not in st.session_state:
    st.session_state.messages = []
if "agent" not in st.session_state:
    st.session_state.agent = None


@st.cache_resource
def get_fund_api() -> MutualFundsAPI:
    """One client per server process so cached pages and details are reused"""
    return MutualFundsAPI()


def init_agent():
    """Initialize the PaisaWise agent"""
    if st.session_state.agent is None:
        try:
            from agents.orchestrator import PaisaWiseAgent
            st.session_state.agent = PaisaWiseAgent()
        except Exception as e:
            logger.exception("Agent initialisation failed")
            st.error(f"Failed to initialize assistant: {e}")
            st.info("Make sure OPENAI_API_KEY is set in your environment")


def show_form_errors(error: FormValidationError):
    st.error(f"**{error.title}**")
    for message in error.errors.values():
        st.markdown(f"- {message}")


def create_risk_gauge(score: float, title: str = "Risk Score"):
    """Gauge for the 0-10 risk score"""
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=score,
        number={"suffix": "/10", "font": {"size": 36}},
        title={"text": title, "font": {"size": 16}},
        gauge={
            "axis": {"range": [0, 10], "tickwidth": 1},
            "bar": {"color": "#4f46e5"},
            "bgcolor": "white",
            "steps": [
                {"range": [0, 3], "color": "#e8f5e9"},
                {"range": [3, 6], "color": "#fff3e0"},
                {"range": [6, 10], "color": "#ffebee"}
            ],
        }
    ))
    fig.update_layout(
        height=220,
        margin=dict(l=20, r=20, t=40, b=20),
        paper_bgcolor="rgba(0,0,0,0)"
    )
    return fig


def create_donut_chart(labels: list, values: list, title: str):
    """Donut chart for spending or allocation breakdowns"""
    fig = go.Figure(data=[go.Pie(
        labels=labels,
        values=values,
        hole=0.6,
        textinfo="label+percent",
        textposition="outside"
    )])
    fig.update_layout(
        title=dict(text=title, x=0.5, font=dict(size=18)),
        showlegend=False,
        height=380,
        margin=dict(l=20, r=20, t=60, b=20),
        paper_bgcolor="rgba(0,0,0,0)"
    )
    return fig


def create_budget_bar_chart(tracker: BudgetTracker):
    """Budgeted vs spent per category"""
    df = pd.DataFrame({
        "Category": [item.category for item in tracker.categories],
        "Budgeted": [item.budgeted for item in tracker.categories],
        "Spent": [item.spent for item in tracker.categories],
    })
    fig = px.bar(
        df.melt(id_vars="Category", var_name="Type", value_name="Amount"),
        x="Category",
        y="Amount",
        color="Type",
        barmode="group",
        title="Budget vs Spending",
        color_discrete_map={"Budgeted": "#c7d2fe", "Spent": "#4f46e5"}
    )
    fig.update_layout(
        height=360,
        margin=dict(l=20, r=20, t=60, b=20),
        paper_bgcolor="rgba(0,0,0,0)",
        yaxis_title="Amount (₹)",
        xaxis_title=""
    )
    return fig


def create_portfolio_chart(tracker: PortfolioTracker, period: str):
    """Area chart of month-end portfolio value"""
    df = tracker.to_frame(period)
    fig = px.area(df, x="Month", y="Value", title=f"Portfolio Value ({period})")
    fig.update_traces(line_color="#4f46e5", fillcolor="rgba(79, 70, 229, 0.15)",
                      hovertemplate="%{x|%b %Y}<br>₹%{y:,.0f}<extra></extra>")
    fig.update_layout(
        height=360,
        margin=dict(l=20, r=20, t=60, b=20),
        paper_bgcolor="rgba(0,0,0,0)",
        yaxis_title="Value (₹)",
        xaxis_title=""
    )
    return fig


def render_header():
    col1, col2, col3 = st.columns([1, 3, 1])
    with col2:
        st.markdown("""
        <div style='text-align: center; padding: 16px 0;'>
            <h1 style='font-size: 2.8rem; margin-bottom: 0;'>₹ PaisaWise</h1>
            <p style='font-size: 1.1rem; color: #666; margin-top: 8px;'>
                Invest smarter, spend wiser
            </p>
        </div>
        """, unsafe_allow_html=True)


def render_sidebar():
    """Quick SIP check and upcoming reminders"""
    with st.sidebar:
        st.markdown("## ⚡ Quick SIP Check")

        amount = st.number_input("Monthly SIP (₹)", min_value=0, value=5000, step=500, key="quick_sip")
        rate = st.number_input("Expected Return (%)", min_value=0.0, value=12.0, step=0.5, key="quick_rate")
        years = st.number_input("Years", min_value=0, value=10, step=1, key="quick_years")

        result = FinancialCalculator().sip(amount, rate, years)
        if result:
            st.success("**Maturity Value**")
            st.markdown(f"### {format_inr(result.maturity_amount)}")
            st.caption(
                f"Invested {format_inr(result.invested_amount)} · "
                f"Gains {format_inr(result.estimated_returns)}"
            )

        st.markdown("---")
        st.markdown("### 🔔 Coming Up")
        upcoming = st.session_state.calendar.upcoming(today, days=14)
        if not upcoming:
            st.caption("Nothing in the next two weeks")
        for event in upcoming[:5]:
            when = "Today" if event.days_away == 0 else (
                "Tomorrow" if event.days_away == 1 else event.reminder.date.strftime("%d %b")
            )
            badge = "🔴 " if event.urgent else ""
            amount_text = f" · {event.reminder.amount}" if event.reminder.amount else ""
            st.markdown(f"{badge}**{event.reminder.title}**  \n{when}{amount_text}")

        st.markdown("---")
        st.markdown("""
        <div style='background-color: #fff3cd; padding: 12px; border-radius: 8px;
                    border-left: 4px solid #ffc107;'>
            <p style='margin: 0; font-size: 0.85rem; color: #856404;'>
                ⚠️ Mutual fund investments are subject to market risks.
                Read all scheme related documents carefully.
            </p>
        </div>
        """, unsafe_allow_html=True)


def render_dashboard_tab():
    tracker: BudgetTracker = st.session_state.budget
    planner: GoalPlanner = st.session_state.goals
    summary = tracker.summary()
    goals_overview = planner.overview()

    st.markdown("### 📊 Overview")
    m1, m2, m3, m4 = st.columns(4)
    with m1:
        st.metric("💰 Monthly Income", format_inr(summary.total_income))
    with m2:
        st.metric("💸 Spent", format_inr(summary.total_spent), delta=f"{summary.expense_ratio}% of income",
                  delta_color="inverse")
    with m3:
        st.metric("🏦 Savings", format_inr(summary.actual_savings), delta=f"{summary.savings_rate}% rate")
    with m4:
        st.metric("🎯 Goals Funded", f"{goals_overview.overall_progress}%",
                  help=f"{format_inr(goals_overview.total_saved)} of {format_inr(goals_overview.total_target)}")

    col1, col2 = st.columns(2)
    with col1:
        if tracker.categories:
            fig = create_donut_chart(
                [item.category for item in tracker.categories],
                [item.spent for item in tracker.categories],
                "Where the money went"
            )
            st.plotly_chart(fig, use_container_width=True)
    with col2:
        st.markdown("#### 🎯 Goals")
        for goal in planner.goals:
            progress = planner.progress_percent(goal)
            st.markdown(f"**{goal.title}** · {goal.status.value}")
            st.progress(progress / 100)
            st.caption(f"{format_inr(goal.current_amount)} of {format_inr(goal.target_amount)} ({progress}%)")

    st.markdown("---")
    render_portfolio_section()


def render_portfolio_section():
    portfolio: PortfolioTracker = st.session_state.portfolio
    stats = portfolio.stats()

    st.markdown("### 💼 Portfolio")
    s1, s2, s3, s4 = st.columns(4)
    with s1:
        st.metric("Total Investment", format_inr(stats.total_investment),
                  help=f"Across {stats.fund_count} mutual funds")
    with s2:
        st.metric("Current Value", format_inr(stats.current_value),
                  delta=f"{stats.total_return_percent:+}%")
    with s3:
        st.metric("Monthly SIP", format_inr(stats.monthly_sip))
    with s4:
        st.metric("Monthly Growth", f"{stats.monthly_growth:+}%")

    if not portfolio.history:
        st.info("No portfolio history yet")
        return

    period = st.radio("Period", list(PERIODS), index=2, horizontal=True, key="portfolio_period")
    st.plotly_chart(create_portfolio_chart(portfolio, period), use_container_width=True)
    st.caption(f"{period} change: {portfolio.period_change(period):+}% · "
               f"total gain {format_inr(stats.total_gain)}")


def render_budget_tab():
    tracker: BudgetTracker = st.session_state.budget
    summary = tracker.summary()

    st.markdown("### 💳 Budget Tracker")
    st.markdown("_Track expenses, income and shared bills for this month_")

    m1, m2, m3, m4 = st.columns(4)
    with m1:
        st.metric("Total Budget", format_inr(summary.total_budget))
    with m2:
        st.metric("Total Spent", format_inr(summary.total_spent))
    with m3:
        st.metric("Savings Rate", f"{summary.savings_rate}%")
    with m4:
        st.metric("Expense Ratio", f"{summary.expense_ratio}%")

    st.markdown("---")

    # Category cards
    st.markdown("#### 🗂️ Categories")
    cols = st.columns(3)
    for i, item in enumerate(list(tracker.categories)):
        with cols[i % 3]:
            with st.container(border=True):
                health = tracker.category_health(item)
                st.markdown(f"{item.icon} **{item.category}** {HEALTH_COLORS[health]}")
                st.caption(f"{item.transactions} transactions")
                st.progress(min(item.percentage_used, 100) / 100)
                st.markdown(f"{format_inr(item.spent)} / {format_inr(item.budgeted)} · "
                            f"{item.percentage_used:.1f}% used")
                if tracker.is_over_budget(item):
                    st.markdown(f":red[Over by: {format_inr(abs(item.remaining))}]")
                else:
                    st.markdown(f":green[Remaining: {format_inr(item.remaining)}]")
                if st.button("🗑️ Remove", key=f"del_cat_{item.id}", use_container_width=True):
                    tracker.delete_category(item.id)
                    st.rerun()

    st.plotly_chart(create_budget_bar_chart(tracker), use_container_width=True)

    col1, col2, col3 = st.columns(3)
    with col1:
        with st.form("add_expense", clear_on_submit=True):
            st.markdown("#### ➖ Add Expense")
            category_options = [item.category for item in tracker.categories] or DEFAULT_CATEGORIES
            category = st.selectbox("Category", category_options)
            amount = st.number_input("Amount (₹)", min_value=0.0, step=100.0, key="expense_amount")
            description = st.text_input("Description", key="expense_description")
            tx_date = st.date_input("Date", value=today, key="expense_date")
            if st.form_submit_button("Add Expense", use_container_width=True):
                try:
                    tracker.add_expense(category, amount, description, tx_date)
                    st.success("Expense added")
                    st.rerun()
                except FormValidationError as e:
                    show_form_errors(e)

    with col2:
        with st.form("add_income", clear_on_submit=True):
            st.markdown("#### ➕ Add Income")
            source = st.selectbox("Source", [s.value for s in IncomeSource],
                                  format_func=lambda s: s.title())
            amount = st.number_input("Amount (₹)", min_value=0.0, step=1000.0, key="income_amount")
            description = st.text_input("Description", key="income_description")
            tx_date = st.date_input("Date", value=today, key="income_date")
            if st.form_submit_button("Add Income", use_container_width=True):
                try:
                    tracker.add_income(source, amount, description, tx_date)
                    st.success("Income added")
                    st.rerun()
                except FormValidationError as e:
                    show_form_errors(e)

    with col3:
        with st.form("add_category", clear_on_submit=True):
            st.markdown("#### 🆕 New Category")
            name = st.text_input("Category name")
            budgeted = st.number_input("Monthly budget (₹)", min_value=0.0, step=500.0)
            icon = st.text_input("Icon (emoji)", max_chars=2)
            if st.form_submit_button("Create", use_container_width=True):
                try:
                    tracker.add_category(name, budgeted, icon=icon)
                    st.rerun()
                except FormValidationError as e:
                    show_form_errors(e)

    st.markdown("---")
    st.markdown("#### 🧾 Recent Transactions")
    recent = tracker.recent_transactions()
    if recent:
        tx_df = pd.DataFrame([{
            "Date": "Today" if tx.date == today else tx.date.strftime("%d %b %Y"),
            "Description": tx.description,
            "Category": tx.category,
            "Amount": format_inr(tx.signed_amount),
        } for tx in recent])
        st.dataframe(tx_df, use_container_width=True, hide_index=True)

    st.markdown("---")
    render_split_bills()


def render_split_bills():
    ledger: SplitLedger = st.session_state.ledger
    splitter: BillSplitter = st.session_state.splitter

    st.markdown("#### 👥 Split Bills")
    c1, c2 = st.columns(2)
    with c1:
        st.metric("Owed to you", format_inr(ledger.owed_to_you()))
    with c2:
        st.metric("You owe", format_inr(ledger.you_owe()))

    with st.expander("➕ Create Split Bill"):
        splitter.description = st.text_input("Bill description", value=splitter.description,
                                             placeholder="e.g., Dinner at Restaurant")
        total = st.number_input("Total amount (₹)", min_value=0.0, step=100.0,
                                value=float(splitter.total_amount))
        if total != splitter.total_amount:
            splitter.set_total(total)

        method = st.radio("Split method", ["Equal Split", "Custom Split"], horizontal=True,
                          index=0 if splitter.method == SplitMethod.EQUAL else 1)
        if method == "Equal Split" and splitter.method != SplitMethod.EQUAL:
            splitter.use_equal_split()
        elif method == "Custom Split" and splitter.method != SplitMethod.CUSTOM:
            splitter.use_custom_split()

        n1, n2 = st.columns([3, 1])
        with n1:
            new_name = st.text_input("Add participant", placeholder="Enter name...", key="split_new_name")
        with n2:
            st.markdown("<br>", unsafe_allow_html=True)
            if st.button("Add", use_container_width=True):
                try:
                    splitter.add_participant(new_name)
                    st.rerun()
                except ValueError as e:
                    st.error(str(e))

        st.caption(f"Participants ({len(splitter.participants)}) · "
                   f"₹{splitter.split_total:.2f} / ₹{splitter.total_amount:.2f}")
        for participant in list(splitter.participants):
            p1, p2, p3 = st.columns([3, 2, 1])
            with p1:
                st.markdown(f"**{participant.name}**")
            with p2:
                if splitter.method == SplitMethod.CUSTOM:
                    share = st.number_input("Share", min_value=0.0, step=10.0, value=float(participant.amount),
                                            key=f"share_{participant.name}", label_visibility="collapsed")
                    if share != participant.amount:
                        splitter.set_amount(participant.name, share)
                else:
                    st.markdown(f"₹{participant.amount:.2f}")
            with p3:
                if participant.name != YOU and st.button("✖", key=f"rm_{participant.name}"):
                    splitter.remove_participant(participant.name)
                    st.rerun()

        if splitter.total_amount > 0 and len(splitter.participants) > 1:
            if splitter.is_balanced:
                st.success("Amounts balanced")
            else:
                st.error("Amounts don't match")

        if st.button("Create Split Bill", type="primary", use_container_width=True):
            try:
                ledger.add(splitter.build())
                st.session_state.splitter = BillSplitter()
                st.success("Split bill has been created successfully.")
                st.rerun()
            except FormValidationError as e:
                show_form_errors(e)

    for index, bill in enumerate(ledger.bills):
        with st.container(border=True):
            st.markdown(f"**{bill.description}** · {format_inr(bill.total_amount)} · {bill.date:%d %b %Y}")
            for participant in bill.participants:
                status = "✅ settled" if participant.settled else "⏳ pending"
                cols = st.columns([3, 2, 2])
                cols[0].markdown(participant.name)
                cols[1].markdown(format_inr(participant.amount, 2))
                if participant.settled:
                    cols[2].markdown(status)
                elif cols[2].button("Mark settled", key=f"settle_{index}_{participant.name}"):
                    ledger.settle(index, participant.name)
                    st.rerun()


def render_goals_tab():
    planner: GoalPlanner = st.session_state.goals

    st.markdown("### 🎯 Smart Goals")
    overview = planner.overview()
    m1, m2, m3 = st.columns(3)
    with m1:
        st.metric("Total Target", format_inr(overview.total_target))
    with m2:
        st.metric("Saved So Far", format_inr(overview.total_saved))
    with m3:
        st.metric("Overall Progress", f"{overview.overall_progress}%")

    for goal in list(planner.goals):
        with st.container(border=True):
            g1, g2 = st.columns([3, 2])
            with g1:
                st.markdown(f"**{goal.title}** · {goal.category.value} · {goal.priority.value} priority")
                progress = planner.progress_percent(goal)
                st.progress(progress / 100)
                st.caption(f"{format_inr(goal.current_amount)} of {format_inr(goal.target_amount)} "
                           f"({progress}%) · Target {goal.target_date:%b %Y} · {goal.status.value}")
                st.caption(f"Monthly needed: {format_inr(planner.monthly_required(goal, today))} · "
                           f"{planner.months_remaining(goal, today)} months left")
            with g2:
                contribution = st.number_input("Contribute (₹)", min_value=0.0, step=1000.0,
                                               key=f"contrib_{goal.id}")
                b1, b2 = st.columns(2)
                if b1.button("Add", key=f"add_contrib_{goal.id}", use_container_width=True):
                    try:
                        planner.add_contribution(goal.id, contribution, today=today)
                        st.rerun()
                    except ValueError as e:
                        st.error(str(e))
                if b2.button("Delete", key=f"del_goal_{goal.id}", use_container_width=True):
                    planner.delete_goal(goal.id)
                    st.rerun()

    with st.form("add_goal", clear_on_submit=True):
        st.markdown("#### ➕ New Goal")
        c1, c2, c3 = st.columns(3)
        with c1:
            title = st.text_input("Title", key="goal_title")
            category = st.selectbox("Category", [c.value for c in GoalCategory])
        with c2:
            target = st.number_input("Target (₹)", min_value=0.0, step=10000.0)
            current = st.number_input("Already saved (₹)", min_value=0.0, step=1000.0)
        with c3:
            target_date = st.date_input("Target date", value=today + timedelta(days=365))
            monthly = st.number_input("Monthly contribution (₹)", min_value=0.0, step=1000.0)
        priority = st.select_slider("Priority", options=[p.value for p in GoalPriority], value="Medium")
        if st.form_submit_button("Create Goal", use_container_width=True):
            try:
                planner.add_goal(
                    title=title,
                    target_amount=target,
                    current_amount=current,
                    target_date=target_date,
                    category=GoalCategory(category),
                    priority=GoalPriority(priority),
                    monthly_contribution=monthly,
                    today=today
                )
                st.rerun()
            except FormValidationError as e:
                show_form_errors(e)


def render_calendar_tab():
    cal: ReminderCalendar = st.session_state.calendar
    year, month = st.session_state.view_month

    st.markdown("### 📅 Investment Calendar")
    st.markdown("_Track your SIP dates, goals and financial reminders_")

    n1, n2, n3 = st.columns([1, 3, 1])
    with n1:
        if st.button("◀ Previous", use_container_width=True):
            st.session_state.view_month = previous_month(year, month)
            st.rerun()
    with n3:
        if st.button("Next ▶", use_container_width=True):
            st.session_state.view_month = next_month(year, month)
            st.rerun()

    view = cal.month_view(year, month, today)
    with n2:
        st.markdown(f"<h3 style='text-align:center'>{view.month_name} {view.year}</h3>", unsafe_allow_html=True)

    header = st.columns(7)
    for col, name in zip(header, ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]):
        col.markdown(f"**{name}**")

    cells = [None] * view.leading_blanks + view.days
    for week_start in range(0, len(cells), 7):
        cols = st.columns(7)
        for col, day in zip(cols, cells[week_start:week_start + 7]):
            if day is None:
                continue
            dots = "".join(
                f"<span style='color:{EVENT_COLORS[marker]}'>●</span>" for marker in day.markers
            )
            if day.has_overflow:
                dots += "<span style='color:#9ca3af'>●</span>"
            css = "calendar-cell calendar-today" if day.is_today else "calendar-cell"
            col.markdown(f"<div class='{css}'>{day.day}<br>{dots}</div>", unsafe_allow_html=True)

    st.markdown("---")
    left, right = st.columns(2)
    with left:
        st.markdown(f"#### Reminders in {view.month_name}")
        for day in view.days:
            for reminder in day.events:
                r1, r2 = st.columns([4, 1])
                amount_text = f" · {reminder.amount}" if reminder.amount else ""
                r1.markdown(f"**{reminder.date:%d %b}** · {reminder.title} "
                            f"_({TYPE_LABELS[reminder.type]})_{amount_text}")
                if r2.button("🗑️", key=f"del_rem_{reminder.id}"):
                    cal.delete_reminder(reminder.id)
                    st.rerun()

    with right:
        with st.form("add_reminder", clear_on_submit=True):
            st.markdown("#### ➕ Add Reminder")
            title = st.text_input("Title", key="reminder_title")
            description = st.text_area("Description (Optional)", height=80)
            reminder_date = st.date_input("Date", value=today, key="reminder_date")
            reminder_type = st.selectbox("Type", list(ReminderType), format_func=lambda t: TYPE_LABELS[t])
            amount = st.text_input("Amount (SIP and goal reminders)", placeholder="₹10,000")
            if st.form_submit_button("Save Reminder", use_container_width=True):
                try:
                    cal.add_reminder(title, reminder_date, reminder_type, description, amount)
                    st.rerun()
                except FormValidationError as e:
                    show_form_errors(e)


def render_funds_tab():
    catalog: FundCatalog = st.session_state.catalog

    st.markdown("### 📈 Mutual Funds")
    st.markdown("_Explore and compare funds_")

    with st.expander("🌐 Load funds from the PaisaWise API"):
        c1, c2, c3 = st.columns([1, 1, 2])
        page = c1.number_input("Page", min_value=0, value=0, step=1)
        size = c2.number_input("Page size", min_value=1, max_value=100, value=20, step=5)
        with c3:
            st.markdown("<br>", unsafe_allow_html=True)
            if st.button("Fetch funds", use_container_width=True):
                with st.spinner("Loading funds..."):
                    try:
                        fund_page = get_fund_api().get_mutual_funds(int(page), int(size))
                        added = catalog.from_page(fund_page)
                        st.success(f"Loaded page {fund_page.page + 1} of {fund_page.total_pages} "
                                   f"({added} new funds)")
                    except (httpx.HTTPError, ValueError) as e:
                        st.error(f"Could not load funds: {e}")

    f1, f2, f3, f4 = st.columns([3, 2, 2, 2])
    search = f1.text_input("Search", placeholder="Fund name or type")
    category = f2.selectbox("Category", FUND_CATEGORIES,
                            format_func=lambda c: f"{c} ({catalog.category_counts()[c]})")
    risks = f3.multiselect("Risk", RISK_LEVELS)
    durations = f4.multiselect("Duration", DURATIONS)

    funds = catalog.filter(search, category, risks, durations)
    st.markdown(f"**{category}** ({len(funds)} funds)")

    if not funds:
        st.info("No funds found. Try adjusting your filters or search terms.")

    for fund in funds:
        with st.container(border=True):
            h1, h2, h3 = st.columns([4, 2, 2])
            with h1:
                rating = f" · ⭐ {fund.rating}" if fund.rating else ""
                st.markdown(f"**{fund.name}**{rating}")
                st.caption(f"{fund.amc} · {fund.scheme_type} · {fund.plan.title()} · {fund.dividend_type.title()}")
                if fund.tags:
                    st.caption(" · ".join(fund.tags))
            with h2:
                st.metric("NAV", f"₹{fund.nav:,.4f}", help=f"As of {format_fund_date(fund.last_price_date)}")
                if fund.risk:
                    st.caption(f"{fund.risk} risk · {fund.duration}")
            with h3:
                st.caption(f"Min purchase {format_inr(fund.minimum_purchase)}")
                if not fund.is_purchase_allowed:
                    st.caption(":red[Purchases paused]")
                b1, b2 = st.columns(2)
                if b1.button("Compare", key=f"cmp_{fund.tradingsymbol}", use_container_width=True):
                    st.session_state.comparison = FundComparison(fund, catalog)
                if b2.button("Details", key=f"det_{fund.tradingsymbol}", use_container_width=True):
                    st.session_state.details_symbol = fund.tradingsymbol

    render_fund_details()
    render_fund_comparison()


def render_fund_details():
    symbol = st.session_state.get("details_symbol")
    if not symbol:
        return

    st.markdown("---")
    with st.spinner("Loading details…"):
        try:
            details = get_fund_api().get_fund_details(symbol)
        except (httpx.HTTPError, ValueError) as e:
            st.error(f"Could not load details for {symbol}: {e}")
            details = None

    if details is None:
        if st.button("Close details", key="close_details_error"):
            st.session_state.details_symbol = None
            st.rerun()
        return

    overview = details.overview
    st.markdown(f"#### {overview.name}")
    d1, d2, d3, d4 = st.columns(4)
    d1.metric("AMC", overview.amc)
    d2.metric("Scheme", overview.scheme_type)
    d3.metric("Plan", overview.plan.title())
    d4.metric("Last NAV", f"₹{overview.nav:.4f}")

    if details.ai.historical_performance:
        nav_df = pd.DataFrame([p.model_dump() for p in details.ai.historical_performance])
        fig = px.line(nav_df, x="date", y="nav", title="NAV history")
        st.plotly_chart(fig, use_container_width=True)

    st.markdown("**Description & Objectives**")
    st.markdown(details.ai.description or "_No description available._")
    if details.ai.objectives:
        st.markdown(" · ".join(f"`{o}`" for o in details.ai.objectives))

    st.markdown("**Sector-wise Holdings**")
    if details.ai.sector_holdings:
        for holding in details.ai.sector_holdings:
            st.markdown(f"{holding.sector} · {holding.percentage}%")
            st.progress(min(holding.percentage, 100) / 100)
    else:
        st.caption("No sector breakdown available.")

    st.markdown("**Statistical & Analytical Data**")
    if details.ai.stats:
        cols = st.columns(3)
        for i, stat in enumerate(details.ai.stats):
            cols[i % 3].metric(stat.label, stat.value)
    else:
        st.caption("No statistics available.")

    if details.ai.summary_recommendation:
        st.info(f"**AI Summary:** {details.ai.summary_recommendation}")

    if st.button("Close details"):
        st.session_state.details_symbol = None
        st.rerun()


def render_fund_comparison():
    comparison: FundComparison | None = st.session_state.comparison
    if comparison is None:
        return

    st.markdown("---")
    st.markdown(f"#### ⚖️ Compare with {comparison.base.name}")

    if not comparison.is_full:
        remaining = MAX_COMPARE - len(comparison.compare_with)
        options = {f.name: f for f in comparison.available()}
        choice = st.selectbox(f"Select up to {remaining} more fund(s)", ["—"] + list(options))
        if choice != "—" and st.button("Add to comparison"):
            comparison.add(options[choice])
            st.rerun()

    for fund in comparison.compare_with:
        if st.button(f"Remove {fund.name}", key=f"rm_cmp_{fund.tradingsymbol}"):
            comparison.remove(fund.tradingsymbol)
            st.rerun()

    st.dataframe(comparison.table().astype(str), use_container_width=True)

    if st.button("Close comparison"):
        st.session_state.comparison = None
        st.rerun()


def render_calculator_tab():
    st.markdown("### 🧮 Financial Calculator")
    calculator = FinancialCalculator()

    basic_tab, sip_tab, emi_tab, ci_tab = st.tabs(["Basic", "SIP Calculator", "Loan EMI", "Investment"])

    with basic_tab:
        keypad: BasicCalculator = st.session_state.keypad
        st.markdown(f"<div style='font-size:2rem;text-align:right;font-family:monospace;"
                    f"padding:12px;border-radius:8px;background:#f1f5f9'>{keypad.display}</div>",
                    unsafe_allow_html=True)
        layout = [
            ["C", "CE", "⌫", "÷"],
            ["7", "8", "9", "×"],
            ["4", "5", "6", "−"],
            ["1", "2", "3", "+"],
            ["0", "00", ".", "="],
        ]
        for row in layout:
            cols = st.columns(4)
            for col, key in zip(cols, row):
                if col.button(key, key=f"keypad_{key}", use_container_width=True):
                    if key == "00":
                        keypad.press("0")
                        keypad.press("0")
                    else:
                        keypad.press(key)
                    st.rerun()

    with sip_tab:
        c1, c2 = st.columns(2)
        with c1:
            amount = st.number_input("Monthly Investment (₹)", min_value=0.0, value=5000.0, step=500.0)
            rate = st.number_input("Expected Annual Return (%)", min_value=0.0, value=12.0, step=0.5)
            years = st.number_input("Investment Period (Years)", min_value=0.0, value=10.0, step=1.0)
        with c2:
            result = calculator.sip(amount, rate, years)
            if result:
                st.metric("Maturity Value", format_inr(result.maturity_amount))
                st.metric("Total Invested", format_inr(result.invested_amount))
                st.metric("Estimated Returns", format_inr(result.estimated_returns))
                st.plotly_chart(create_donut_chart(
                    ["Invested", "Returns"], [result.invested_amount, result.estimated_returns], "SIP breakdown"
                ), use_container_width=True)
            else:
                st.info("Enter all values to see results")

    with emi_tab:
        c1, c2 = st.columns(2)
        with c1:
            principal = st.number_input("Loan Amount (₹)", min_value=0.0, value=1000000.0, step=50000.0)
            rate = st.number_input("Interest Rate (% per annum)", min_value=0.0, value=8.5, step=0.1)
            years = st.number_input("Loan Tenure (Years)", min_value=0.0, value=20.0, step=1.0)
        with c2:
            result = calculator.emi(principal, rate, years)
            if result:
                st.metric("Monthly EMI", format_inr(result.emi))
                st.metric("Total Amount", format_inr(result.total_amount))
                st.metric("Total Interest", format_inr(result.total_interest))
            else:
                st.info("Enter all values to see results")

    with ci_tab:
        c1, c2 = st.columns(2)
        with c1:
            principal = st.number_input("Principal Amount (₹)", min_value=0.0, value=100000.0, step=10000.0)
            rate = st.number_input("Annual Interest Rate (%)", min_value=0.0, value=10.0, step=0.5)
            years = st.number_input("Time Period (Years)", min_value=0.0, value=5.0, step=1.0)
        with c2:
            result = calculator.compound_interest(principal, rate, years)
            if result:
                st.metric("Maturity Amount", format_inr(result.maturity_amount))
                st.metric("Interest Earned", format_inr(result.interest_earned))
            else:
                st.info("Enter all values to see results")


def render_risk_tab():
    analyzer = RiskAnalyzer()

    st.markdown("### 🛡️ Risk Analysis")
    st.markdown("_Portfolio risk assessment and recommendations_")

    allocation_rows = load_sample_data()["asset_allocation"]
    allocation = {row["name"]: row["value"] for row in allocation_rows}

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(create_donut_chart(list(allocation), list(allocation.values()), "Asset allocation"),
                        use_container_width=True)
    with col2:
        st.markdown("#### 💡 Recommendations")
        for insight in analyzer.allocation_insights(allocation):
            message = f"**{insight.title}**\n\n{insight.description}"
            if insight.severity == "warning":
                st.warning(message)
            elif insight.severity == "success":
                st.success(message)
            else:
                st.info(message)

    st.markdown("---")
    st.markdown("#### 🎚️ Risk Calculator")
    r1, r2, r3 = st.columns(3)
    tolerance = r1.slider("Risk tolerance", 1, 10, 5)
    horizon = r2.slider("Investment horizon (years)", 1, 30, 10)
    monthly = r3.number_input("Monthly investment (₹)", min_value=0.0, value=25000.0, step=1000.0)

    recommendation = analyzer.recommend_allocation(tolerance, horizon, monthly)
    a1, a2, a3 = st.columns(3)
    a1.metric("Equity", f"{recommendation.equity_percent:.0f}%")
    a2.metric("Debt", f"{recommendation.debt_percent:.0f}%")
    if recommendation.projected_corpus:
        a3.metric("Projected corpus", format_inr(recommendation.projected_corpus),
                  help=f"At a blended {recommendation.expected_return}% annual return")

    st.markdown("---")
    st.markdown("#### 📉 Live Portfolio Metrics")
    holdings_text = st.text_input(
        "Holdings (symbol:weight, comma separated)",
        value="NIFTYBEES.NS:60, GOLDBEES.NS:20, LIQUIDBEES.NS:20",
        help="Yahoo Finance tickers; weights are normalised"
    )
    if st.button("📊 Analyse", type="primary"):
        try:
            weights = {}
            for part in holdings_text.split(","):
                symbol, _, weight = part.strip().partition(":")
                if symbol:
                    weights[symbol.strip().upper()] = float(weight or 1)
        except ValueError:
            st.error("Weights must be numbers, e.g. NIFTYBEES.NS:60")
            return

        with st.spinner("Fetching price history..."):
            metrics = analyzer.analyze(weights)
        if metrics is None:
            st.error("Could not fetch price history for these holdings")
            return

        g1, g2 = st.columns([2, 3])
        with g1:
            st.plotly_chart(create_risk_gauge(metrics.risk_score), use_container_width=True)
        with g2:
            st.metric("Annual Return", f"{metrics.annual_return}%")
            st.metric("Sharpe Ratio", metrics.sharpe_ratio)
            st.metric("Beta vs NIFTY 50", metrics.beta if metrics.beta is not None else "N/A")
        h1, h2, h3 = st.columns(3)
        h1.metric("Volatility", f"{metrics.volatility}%")
        h2.metric("Max Drawdown", f"{metrics.max_drawdown}%")
        h3.metric("VaR (95%, 1 day)", f"{metrics.var_95}%")


def render_assistant_tab():
    st.markdown("### 💬 Ask PaisaWise")
    st.markdown("_SIPs, loans, fund lookups and budgeting questions_")

    for message in st.session_state.messages:
        with st.chat_message(message["role"]):
            st.markdown(message["content"])

    include_budget = st.checkbox("Share my budget with the assistant", value=True)

    if prompt := st.chat_input("e.g. What will ₹10,000 a month become in 15 years?"):
        st.session_state.messages.append({"role": "user", "content": prompt})
        with st.chat_message("user"):
            st.markdown(prompt)

        with st.chat_message("assistant"):
            with st.spinner("Thinking..."):
                init_agent()
                if st.session_state.agent:
                    context = summarize_budget(st.session_state.budget) if include_budget else None
                    response = st.session_state.agent.chat(prompt, budget_context=context)
                    st.markdown(response)
                    st.session_state.messages.append({"role": "assistant", "content": response})
                else:
                    st.error("Assistant not initialized. Please check your API key.")

    if st.session_state.messages and st.button("🗑️ Clear Chat History", use_container_width=True):
        st.session_state.messages = []
        st.rerun()


def render_learn_tab():
    hub: KnowledgeBase = st.session_state.knowledge

    st.markdown("### 📚 Knowledge Center")
    st.markdown("_Learn about investments, mutual funds and financial planning_")

    query = st.text_input("Search articles", placeholder="Search articles...", key="article_search")
    counts = hub.categories()
    category = st.radio(
        "Category",
        list(counts),
        format_func=lambda name: f"{name} ({counts[name]})",
        horizontal=True,
        key="article_category"
    )

    main_col, side_col = st.columns([3, 1])
    with main_col:
        featured = hub.featured(query, category)
        latest = hub.latest(query, category)
        if not featured and not latest:
            st.info("No articles match your search")

        if featured:
            st.markdown("#### ⭐ Featured Articles")
            cols = st.columns(2)
            for i, article in enumerate(featured):
                with cols[i % 2]:
                    with st.container(border=True):
                        render_article(article)

        if latest:
            st.markdown("#### 🆕 Latest Articles")
            for article in latest:
                with st.container(border=True):
                    render_article(article)

    with side_col:
        st.markdown("#### 🧰 Quick Tools")
        for shortcut in hub.quick_tools:
            with st.container(border=True):
                st.markdown(f"**{shortcut.title}**")
                st.caption(shortcut.description)
                st.caption(f"Open the {shortcut.tab} tab")


def render_article(article):
    st.markdown(f"**{article.title}**")
    st.write(article.excerpt)
    st.caption(f"{article.category} · {article.read_minutes} min read · {article.author} · "
               f"⭐ {article.rating} · 👁 {article.views_label}")


def main():
    """Main app entry point"""
    render_header()
    render_sidebar()

    tabs = st.tabs([
        "📊 Dashboard",
        "💳 Budget",
        "🎯 Goals",
        "📅 Calendar",
        "📈 Mutual Funds",
        "🧮 Calculator",
        "🛡️ Risk Analysis",
        "📚 Learn",
        "💬 Assistant",
    ])
    renderers = [
        render_dashboard_tab,
        render_budget_tab,
        render_goals_tab,
        render_calendar_tab,
        render_funds_tab,
        render_calculator_tab,
        render_risk_tab,
        render_learn_tab,
        render_assistant_tab,
    ]
    for tab, render in zip(tabs, renderers):
        with tab:
            render()


if __name__ == "__main__":
    main()
