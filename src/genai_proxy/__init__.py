"""
GenAI proxy package.

Provides:
- A FastAPI façade forwarding text, image, document and audio requests to Gemini
- A bounded retry around the upstream call for transient overloads
"""

__version__ = "0.1.0"
