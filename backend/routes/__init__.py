from flask import current_app, request

from services.errors import ValidationError


def init_routes(app):
    """Initialize all routes"""
    from .repository_routes import repository_bp
    from .analysis_routes import analysis_bp

    app.register_blueprint(repository_bp, url_prefix='/api')
    app.register_blueprint(analysis_bp, url_prefix='/api')


def get_json_body():
    """Request body as a dict; anything else is a validation error"""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def require_fields(data, *fields):
    missing = [f for f in fields if not data.get(f)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def get_session():
    return current_app.extensions['analysis_session']
