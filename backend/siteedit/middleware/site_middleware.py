from flask import request, g
from siteedit.errors import NotFound
from siteedit.models.site import Site

def site_middleware(app):
    @app.before_request
    def load_site():
        site_id = (request.view_args or {}).get("site_id")
        if not site_id:
            return  # Route is not site-scoped

        site = Site.query.filter_by(id=site_id, is_active=True).first()
        if not site:
            raise NotFound("Site not found")

        # Attach site to global context
        g.current_site = site
