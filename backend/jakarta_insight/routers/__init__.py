from jakarta_insight.routers import analytics, auth, dashboard, engagement, pages

__all__ = ["analytics", "auth", "dashboard", "engagement", "pages"]
