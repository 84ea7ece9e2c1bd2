"""
AeroTravel operations backend.

Back-office services for a multi-tenant travel agency built on FastAPI and
SQLModel: event notifications, branch inventory and vendors, facility
templates, guide rewards, license compliance and AI SEO content.
"""
