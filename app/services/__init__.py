"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services call repositories for DB operations and raise the HTTP
exceptions from app.utils.exceptions; routers commit the session.
"""
