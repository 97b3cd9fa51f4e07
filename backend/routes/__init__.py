def init_routes(app):
    """Initialize all routes"""
    from .mapping_routes import mappings_bp

    app.register_blueprint(mappings_bp, url_prefix='/api/mappings')
