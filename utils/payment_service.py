import json
import logging

import stripe
from flask import current_app

logger = logging.getLogger(__name__)


class PaymentError(Exception):
    """The payment provider could not create a checkout session."""


class WebhookVerificationError(Exception):
    """A webhook body failed signature verification or could not be parsed."""


def _configure():
    api_key = current_app.config.get("STRIPE_SECRET_KEY")
    if not api_key:
        raise PaymentError("Payment provider is not configured")
    stripe.api_key = api_key


def to_minor_units(amount):
    """Decimal price -> integer amount in the smallest currency unit."""
    return int((amount or 0) * 100)


def create_checkout_session(course, user_id, purchase_id):
    """Create a hosted checkout session and return (session_id, redirect_url)."""
    _configure()
    client_url = current_app.config["CLIENT_URL"].rstrip("/")

    product_data = {"name": course.title}
    if course.thumbnail_url:
        product_data["images"] = [course.thumbnail_url]

    try:
        session = stripe.checkout.Session.create(
            payment_method_types=["card"],
            line_items=[{
                "price_data": {
                    "currency": current_app.config.get("CURRENCY", "inr"),
                    "product_data": product_data,
                    "unit_amount": to_minor_units(course.price),
                },
                "quantity": 1,
            }],
            mode="payment",
            success_url=f"{client_url}/course-progress/{course.id}",
            cancel_url=f"{client_url}/course-detail/{course.id}",
            metadata={
                "course_id": str(course.id),
                "user_id": str(user_id),
                "purchase_id": str(purchase_id),
            },
        )
    except stripe.StripeError as e:
        logger.error("Stripe checkout session failed for course %s: %s", course.id, e)
        raise PaymentError("Error while creating checkout session") from e

    return session.id, session.url


def verify_webhook(payload, signature):
    """Check the provider signature over the raw body and return the event as a dict."""
    secret = current_app.config.get("STRIPE_WEBHOOK_SECRET")
    if not secret:
        raise WebhookVerificationError("Webhook secret is not configured")
    if not signature:
        raise WebhookVerificationError("Missing signature header")

    try:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        stripe.WebhookSignature.verify_header(
            payload, signature, secret, tolerance=stripe.Webhook.DEFAULT_TOLERANCE
        )
    except UnicodeDecodeError as e:
        raise WebhookVerificationError("Malformed webhook payload") from e
    except stripe.SignatureVerificationError as e:
        raise WebhookVerificationError("Webhook signature mismatch") from e

    try:
        return json.loads(payload)
    except ValueError as e:
        raise WebhookVerificationError("Malformed webhook payload") from e
