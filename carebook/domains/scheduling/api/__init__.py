from carebook.domains.scheduling.api.routes import router

__all__ = ["router"]
