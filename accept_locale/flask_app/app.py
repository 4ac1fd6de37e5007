"""
Accept Locale - Flask Application
Negotiates the request language and serves merged locale data.
"""
import os
from typing import Optional

from flask import Flask, current_app, jsonify, request

from accept_locale.flask_app.config import config
from accept_locale.flask_app.services.locale_data import get_item
from accept_locale.flask_app.services.locale_loader import LoadError
from accept_locale.flask_app.services.locale_store import LocaleStore


def create_app(config_name: Optional[str] = None, **overrides) -> Flask:
    """Build the Flask app and bootstrap its LocaleStore.

    A PatternError in LOCALE_LANGS always aborts startup. A LoadError aborts
    startup only when LOCALE_STRICT is set; otherwise the app keeps
    negotiating languages but serves no locale files.
    """
    app = Flask(__name__)
    app.config.from_object(config[config_name or os.getenv('FLASK_ENV', 'development')])
    app.config.update(overrides)

    with app.app_context():
        store = LocaleStore(
            default=app.config['LOCALE_DEFAULT'],
            langs=app.config['LOCALE_LANGS'],
            aliases=app.config['LOCALE_ALIASES'],
            locale_dir=app.config['LOCALE_DIR'],
        )
        try:
            store.create_locale()
        except LoadError as e:
            if app.config['LOCALE_STRICT']:
                raise
            app.logger.error(f"Locale files unavailable, serving default language only: {e}")
            store = LocaleStore(
                default=app.config['LOCALE_DEFAULT'],
                langs=app.config['LOCALE_LANGS'],
                aliases=app.config['LOCALE_ALIASES'],
            ).create_locale()

    app.extensions['locale_store'] = store
    register_routes(app)
    return app


def get_locale_store() -> LocaleStore:
    return current_app.extensions['locale_store']


def negotiate_language() -> str:
    """Language for the current request, from its Accept-Language header."""
    return get_locale_store().lookup(request.headers.get('Accept-Language', ''))


def register_routes(app: Flask) -> None:

    # ============================================================================
    # LOCALE API
    # ============================================================================

    @app.route('/api/locale')
    def api_locale():
        """Report the negotiated language for this request."""
        store = get_locale_store()
        return jsonify({
            'language': negotiate_language(),
            'default': store.default,
            'languages': list(store.langs),
        })

    @app.route('/api/locale/<path:namespace>')
    def api_locale_messages(namespace):
        """Serve ``<namespace>/<language>`` merged over ``<namespace>/<default>``.

        With ``?key=a.b.c`` only that entry of the merged tree is returned.
        """
        store = get_locale_store()
        language = negotiate_language()
        messages = store.merged(f"{namespace}/{store.default}", f"{namespace}/{language}")
        if messages is None:
            current_app.logger.warning(f"No locale files for namespace {namespace} ({language})")
            return jsonify({'error': 'Locale not found'}), 404

        key = request.args.get('key')
        if key:
            try:
                value = get_item(messages, key)
            except KeyError:
                return jsonify({'error': f'Key {key} not found'}), 404
            return jsonify({'language': language, 'key': key, 'value': value})

        return jsonify({'language': language, 'messages': messages})

    # ============================================================================
    # ERROR HANDLERS
    # ============================================================================

    @app.errorhandler(404)
    def not_found(error):
        """404 error handler."""
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """500 error handler."""
        current_app.logger.error(f"Internal error: {error}")
        return jsonify({'error': 'Internal server error'}), 500


# ============================================================================
# INITIALIZATION
# ============================================================================

if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 1111)), debug=True)
