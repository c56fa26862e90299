from cookie_session.schemas.cookie import CookieOptions, SameSite
