"""
Knowledge Hub
Investing articles with search and category filters
"""
from typing import Optional
from models.schemas import Article, QuickTool
from tools.sample_data import load_sample_data


ALL_ARTICLES = "All Articles"
ARTICLE_CATEGORIES = ["Mutual Funds", "SIP Guide", "Tax Saving", "Goal Planning"]


class KnowledgeBase:
    """Articles and shortcuts shown in the Learn tab"""

    def __init__(
        self,
        articles: Optional[list[Article]] = None,
        quick_tools: Optional[list[QuickTool]] = None
    ):
        self.articles: list[Article] = list(articles or [])
        self.quick_tools: list[QuickTool] = list(quick_tools or [])

    @classmethod
    def with_sample_data(cls) -> "KnowledgeBase":
        data = load_sample_data()["knowledge"]
        return cls(
            [Article(**article) for article in data["articles"]],
            [QuickTool(**shortcut) for shortcut in data["quick_tools"]],
        )

    def categories(self) -> dict[str, int]:
        """Article count per category, 'All Articles' first"""
        counts = {ALL_ARTICLES: len(self.articles)}
        for category in ARTICLE_CATEGORIES:
            counts[category] = sum(1 for a in self.articles if a.category == category)
        return counts

    def search(self, query: str = "", category: str = ALL_ARTICLES) -> list[Article]:
        """Case-insensitive match on title, excerpt or author within a category"""
        if category != ALL_ARTICLES and category not in ARTICLE_CATEGORIES:
            raise ValueError(f"Unknown article category: {category}")

        query = (query or "").strip().lower()
        results = []
        for article in self.articles:
            if category != ALL_ARTICLES and article.category != category:
                continue
            text = f"{article.title} {article.excerpt} {article.author}".lower()
            if query and query not in text:
                continue
            results.append(article)
        return results

    def featured(self, query: str = "", category: str = ALL_ARTICLES) -> list[Article]:
        return [a for a in self.search(query, category) if a.featured]

    def latest(self, query: str = "", category: str = ALL_ARTICLES) -> list[Article]:
        return [a for a in self.search(query, category) if not a.featured]


def search_articles(query: str = "", category: str = ALL_ARTICLES) -> dict:
    """Search the knowledge hub (for the assistant)"""
    try:
        articles = KnowledgeBase.with_sample_data().search(query, category)
        return {
            "count": len(articles),
            "articles": [a.model_dump(include={"title", "excerpt", "category", "read_minutes"}) for a in articles],
        }
    except ValueError as e:
        return {"error": str(e)}
