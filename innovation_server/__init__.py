"""Innovation server - users and products backend.

A thin HTTP layer over a MongoDB database:
- Users self-register; an admin can change roles.
- Products are created and listed by anyone.
- Bearer JWTs identify callers; one route family is gated on the admin role.

See SPEC_FULL.md / DESIGN.md for the HTTP surface.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
