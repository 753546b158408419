# API routes
from labelkit.api.routes import documents, health, preview, printing, templates

__all__ = ["documents", "health", "preview", "printing", "templates"]
