"""
Flask application exposing the resolver over HTTP and the realtime channels
over Socket.IO.
"""

import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_socketio import SocketIO
from werkzeug.exceptions import HTTPException

from ..config import ResolverConfig
from ..data_loader import ReferenceDataLoader
from ..exceptions import RegionResolverError, ValidationError
from ..hierarchy import ReferenceHierarchy
from ..matching.name_matcher import HintMatcher
from ..realtime.events import register_socket_handlers
from ..realtime.publisher import RealtimePublisher
from ..realtime.registry import ConnectionRegistry
from ..resolver import RegionResolver
from ..utils.error_handler import create_error_context, log_error_details
from ..utils.request_parser import INVALID_PAYLOAD_MESSAGE, parse_resolve_payload

EXTENSION_KEY = 'region_resolver'


def create_app(config: Optional[ResolverConfig] = None,
               hierarchy: Optional[ReferenceHierarchy] = None,
               resolver: Optional[RegionResolver] = None,
               socketio: Optional[SocketIO] = None,
               logger: Optional[logging.Logger] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        config: Resolver configuration; defaults to the packaged seed data
        hierarchy: Preloaded reference hierarchy; loaded from config when omitted
        resolver: Preconfigured resolver; built from the hierarchy when omitted
        socketio: Socket.IO server; a threading-mode server is created when omitted
        logger: Optional logger instance

    Returns:
        Configured Flask application. Components are available under
        ``app.extensions['region_resolver']``.
    """
    config = config or ResolverConfig()
    logger = logger or logging.getLogger('region_resolver.web')

    if resolver is None:
        if hierarchy is None:
            hierarchy = ReferenceDataLoader(logger).load_from_config(config)
        resolver = RegionResolver(
            hierarchy,
            hint_matcher=HintMatcher(config.hint_fuzzy_threshold, logger=logger),
            logger=logger
        )
    elif hierarchy is None:
        hierarchy = resolver.hierarchy

    app = Flask(__name__)

    if socketio is None:
        socketio = SocketIO(app, async_mode='threading', cors_allowed_origins='*')
    else:
        socketio.init_app(app)

    registry = ConnectionRegistry(logger)
    publisher = RealtimePublisher(socketio, channel_prefix=config.channel_prefix, logger=logger)
    register_socket_handlers(socketio, registry, publisher, logger)

    app.extensions[EXTENSION_KEY] = {
        'config': config,
        'hierarchy': hierarchy,
        'resolver': resolver,
        'socketio': socketio,
        'registry': registry,
        'publisher': publisher
    }

    @app.route('/resolve', methods=['POST'])
    @app.route('/api/geo/resolve', methods=['POST'])
    def resolve():
        # parse regardless of content type; unparsable bodies come back as None
        payload = request.get_json(force=True, silent=True)
        if payload is None:
            return jsonify({'error': INVALID_PAYLOAD_MESSAGE}), 400

        resolve_request = parse_resolve_payload(payload)
        result = resolver.resolve_request(resolve_request)
        return jsonify(result.to_dict())

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({
            'status': 'ok',
            'hierarchy': hierarchy.summary(),
            'resolver': resolver.get_statistics(),
            'realtime': {
                'connections': len(registry),
                'onlineUsers': len(registry.online_users()),
                'publisher': publisher.get_statistics()
            }
        })

    @app.errorhandler(ValidationError)
    def handle_validation_error(error: ValidationError):
        logger.debug(f"Rejected request to {request.path}: {error.message}")
        return jsonify({'error': error.message}), 400

    @app.errorhandler(RegionResolverError)
    def handle_resolver_error(error: RegionResolverError):
        log_error_details(logger, error, create_error_context(request.path))
        return jsonify({'error': 'Internal server error'}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        log_error_details(logger, error, create_error_context(request.path))
        return jsonify({'error': 'Internal server error'}), 500

    return app


def get_component(app: Flask, name: str):
    """Fetch one of the components registered by create_app."""
    return app.extensions[EXTENSION_KEY][name]
