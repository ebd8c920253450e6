# -*- coding: utf-8 -*-
"""
Application exceptions.

Each request-time error carries the HTTP status and the message that is
safe to show to the client. Anything logged goes through the error
handlers in portfolio.middleware.errors.
"""


class ConfigError(RuntimeError):
    """Startup configuration is missing or invalid. Fatal."""


class PortfolioError(Exception):
    status_code = 500
    public_message = "Internal Server Error"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message


class InvalidTierError(PortfolioError):
    status_code = 400
    public_message = "Invalid tier"

    def __init__(self, tier: str):
        super().__init__(f"unknown tier: {tier!r}")
        self.tier = tier


class MissingSessionError(PortfolioError):
    status_code = 400
    public_message = "Missing session ID"


class FormTooLargeError(PortfolioError):
    status_code = 400
    public_message = "Request body too large"


class CheckoutSessionError(PortfolioError):
    """Stripe refused or failed to create a checkout session."""
    status_code = 500
    public_message = "Payment processing error"


class PaymentVerificationError(PortfolioError):
    """Stripe session lookup failed on the success callback."""
    status_code = 500
    public_message = "Payment verification failed"


class CredentialIssueError(PortfolioError):
    """The API key could not be persisted."""
    status_code = 500
    public_message = "Failed to create API key"
