"""
PaisaWise - LangGraph Orchestrator
AI assistant for SIPs, loans, mutual funds and budgeting
"""
import os
from dotenv import load_dotenv
import json
from typing import TypedDict, Annotated, Literal, Sequence
from langgraph.graph import StateGraph, END
from langgraph.prebuilt import ToolNode
from langchain_openai import ChatOpenAI
from langchain_core.messages import HumanMessage, AIMessage, SystemMessage, BaseMessage
from langchain_core.tools import tool
import operator

# Load environment variables from .env file
load_dotenv()

from tools.financial_calculator import (
    calculate_sip,
    calculate_emi,
    calculate_compound_interest,
)
from tools.mutual_funds_api import list_mutual_funds, fetch_fund_details
from tools.risk_analyzer import recommend_allocation
from tools.knowledge_base import search_articles

DEFAULT_MODEL = "gpt-4o-mini"


class AgentState(TypedDict):
    messages: Annotated[Sequence[BaseMessage], operator.add]
    user_query: str


@tool
def sip_calculator(monthly_amount: float, annual_rate: float, years: float) -> dict:
    """
    Project the maturity value of a monthly SIP.

    Args:
        monthly_amount: Monthly investment in INR
        annual_rate: Expected annual return in percent (e.g. 12)
        years: Investment period in years
    """
    return calculate_sip(monthly_amount, annual_rate, years)


@tool
def emi_calculator(principal: float, annual_rate: float, years: float) -> dict:
    """
    Calculate the monthly EMI, total payment and total interest of a loan.

    Args:
        principal: Loan amount in INR
        annual_rate: Interest rate in percent per annum
        years: Loan tenure in years
    """
    return calculate_emi(principal, annual_rate, years)


@tool
def compound_interest_calculator(principal: float, annual_rate: float, years: float) -> dict:
    """
    Grow a lump sum with annual compounding.

    Args:
        principal: Amount invested in INR
        annual_rate: Annual interest rate in percent
        years: Time period in years
    """
    return calculate_compound_interest(principal, annual_rate, years)


@tool
def browse_mutual_funds(page: int = 0, size: int = 20) -> dict:
    """
    List mutual fund instruments with NAV, AMC, plan and minimum purchase amounts.

    Args:
        page: Page number, starting at 0
        size: Funds per page
    """
    return list_mutual_funds(page, size)


@tool
def mutual_fund_details(symbol: str) -> dict:
    """
    Get details for one fund: objectives, sector holdings, statistics and NAV history.

    Args:
        symbol: Fund trading symbol (ISIN), e.g. INF077A01024
    """
    return fetch_fund_details(symbol)


@tool
def asset_allocation(risk_tolerance: int, horizon_years: int, monthly_investment: float = 0.0) -> dict:
    """
    Recommend an equity/debt split and project the SIP corpus.

    Args:
        risk_tolerance: 1 (very conservative) to 10 (very aggressive)
        horizon_years: Investment horizon in years
        monthly_investment: Planned monthly SIP in INR
    """
    return recommend_allocation(risk_tolerance, horizon_years, monthly_investment)


@tool
def learning_articles(query: str = "", category: str = "All Articles") -> dict:
    """
    Find beginner articles in the PaisaWise knowledge hub.

    Args:
        query: Words to look for in the title, excerpt or author
        category: All Articles, Mutual Funds, SIP Guide, Tax Saving or Goal Planning
    """
    return search_articles(query, category)


ALL_TOOLS = [
    sip_calculator,
    emi_calculator,
    compound_interest_calculator,
    browse_mutual_funds,
    mutual_fund_details,
    asset_allocation,
    learning_articles,
]


SYSTEM_PROMPT = """You are PaisaWise, a personal finance assistant for Indian retail investors.

RULES:
1. For SIP projections, use sip_calculator. For loans, use emi_calculator. For lump sums, use compound_interest_calculator. Never compute these from memory.
2. For questions about specific mutual funds, NAVs or fund lists, use browse_mutual_funds or mutual_fund_details.
3. For "how should I split equity and debt" questions, use asset_allocation.
   To point beginners to further reading, use learning_articles.
4. If budget data is ALREADY PROVIDED in the message, analyse it directly.

Always:
- Use exact figures from tool responses
- Format amounts in rupees with Indian digit grouping (₹1,00,000)
- Mention that mutual fund investments are subject to market risks
- Suggest consulting a SEBI registered adviser for major decisions"""


def create_graph():
    """Create the agent workflow graph"""
    llm = ChatOpenAI(
        model=os.getenv("PAISAWISE_MODEL", DEFAULT_MODEL),
        temperature=0.1,
        api_key=os.getenv("OPENAI_API_KEY")
    )
    llm_with_tools = llm.bind_tools(ALL_TOOLS)

    def agent(state: AgentState):
        messages = [SystemMessage(content=SYSTEM_PROMPT)] + list(state["messages"])
        response = llm_with_tools.invoke(messages)
        return {"messages": [response]}

    def should_continue(state: AgentState) -> Literal["tools", "end"]:
        last_message = state["messages"][-1]
        if hasattr(last_message, "tool_calls") and last_message.tool_calls:
            return "tools"
        return "end"

    workflow = StateGraph(AgentState)
    workflow.add_node("agent", agent)
    workflow.add_node("tools", ToolNode(ALL_TOOLS))
    workflow.set_entry_point("agent")
    workflow.add_conditional_edges(
        "agent",
        should_continue,
        {"tools": "tools", "end": END}
    )
    # Tools always return to agent
    workflow.add_edge("tools", "agent")

    return workflow.compile()


def build_context(message: str, budget_context: dict | None = None) -> str:
    """Attach a pre-computed budget snapshot to the user message"""
    if not budget_context:
        return message

    return f"""{message}

[BUDGET DATA - ALREADY COMPUTED]
{json.dumps(budget_context, indent=2, default=str)}

Use these figures directly when answering."""


class PaisaWiseAgent:
    """Main interface for the assistant"""

    def __init__(self):
        self.graph = create_graph()

    def chat(self, message: str, budget_context: dict | None = None) -> str:
        """
        Process a user message

        Args:
            message: User's question
            budget_context: Optional output of summarize_budget()
        """
        state = {
            "messages": [HumanMessage(content=build_context(message, budget_context))],
            "user_query": message,
        }

        result = self.graph.invoke(state)

        for msg in reversed(result["messages"]):
            if isinstance(msg, AIMessage) and msg.content and not msg.tool_calls:
                return msg.content

        return "I couldn't process your request. Please try again."


if __name__ == "__main__":
    agent = PaisaWiseAgent()
    print(agent.chat("If I invest ₹10,000 a month for 15 years at 12%, what will I have?"))
