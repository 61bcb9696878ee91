# HTTP hardening: security headers, CORS, CSRF and API rate limiting

import logging

from flask import current_app

from chatapp.extensions import cors, csrf, limiter, talisman

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = 'Too many requests from this IP, please try again later.'

CONTENT_SECURITY_POLICY = {
    'default-src': "'self'",
    'script-src': "'self'",
    'object-src': "'none'",
    'upgrade-insecure-requests': '',
}

HSTS_MAX_AGE = 365 * 24 * 60 * 60  # 1 year

# Headers Talisman does not manage
EXTRA_SECURITY_HEADERS = {
    'Expect-CT': 'max-age=86400, enforce',
    'X-DNS-Prefetch-Control': 'off',
    'X-Download-Options': 'noopen',
    'X-Permitted-Cross-Domain-Policies': 'none',
    'Cross-Origin-Opener-Policy': 'same-origin',
    'Cross-Origin-Resource-Policy': 'same-origin',
    'Origin-Agent-Cluster': '?1',
    'X-XSS-Protection': '0',
}


def _api_rate_limit():
    return current_app.config['API_RATE_LIMIT']


# One budget per client IP, shared by every blueprint under /api/
api_rate_limit = limiter.shared_limit(
    _api_rate_limit,
    scope='api',
    error_message=RATE_LIMIT_MESSAGE,
)


def init_security(flask_app):
    # Register security middleware in the same order requests should meet it:
    # rate limiter, security headers, CORS, CSRF
    config = flask_app.config

    limiter.init_app(flask_app)

    talisman.init_app(
        flask_app,
        force_https=config['FORCE_HTTPS'],
        frame_options='DENY',
        content_security_policy=CONTENT_SECURITY_POLICY,
        referrer_policy='no-referrer',
        strict_transport_security=True,
        strict_transport_security_max_age=HSTS_MAX_AGE,
        strict_transport_security_include_subdomains=True,
        strict_transport_security_preload=True,
        session_cookie_secure=config['SESSION_COOKIE_SECURE'],
        session_cookie_samesite=config['SESSION_COOKIE_SAMESITE'],
    )

    cors.init_app(
        flask_app,
        origins=config['CORS_ORIGINS'],
        methods=config['CORS_METHODS'],
        supports_credentials=True,
    )

    csrf.init_app(flask_app)

    @flask_app.after_request
    def _set_extra_security_headers(response):
        for name, value in EXTRA_SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        response.headers.pop('X-Powered-By', None)
        return response

    logger.debug(
        "Security middleware ready (cors origins=%s, api limit=%s)",
        config['CORS_ORIGINS'], config['API_RATE_LIMIT']
    )
