from conference_api.routers import articles, conferences, questions, requests, tracks

__all__ = ["articles", "conferences", "questions", "requests", "tracks"]
