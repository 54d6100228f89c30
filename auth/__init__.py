"""
auth: user authentication module.

Provides:
  • signed bearer token creation & verification
  • password hashing (bcrypt)
  • signup / login / profile API routes
  • ``get_current_user_id`` FastAPI dependency
"""
