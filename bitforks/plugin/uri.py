"""
Payment URIs: <scheme>:<address>?amount=<decimal>&label=<text>&message=<text>

Amounts travel in whole currency units in the URI and as a string of the smallest unit everywhere else.
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional
from urllib.parse import parse_qsl, quote, unquote, urlencode

from bitforks.core import InvalidAddress, MalformedUri, URI
from bitforks.networks import NETWORKS, NetworkRegistry
from bitforks.plugin.info import CurrencyInfo
from bitforks.wallet import to_new_format, validate_address

__all__ = ["PaymentRequest", "encode_uri", "parse_uri"]


@dataclass
class PaymentRequest:
    public_address: str
    native_amount: Optional[str] = None
    currency_code: Optional[str] = None
    label: Optional[str] = None
    message: Optional[str] = None
    # The address as written, when it used a legacy prefix and public_address is its rewrite
    legacy_address: Optional[str] = None


def _to_denomination(native_amount: str, multiplier: str) -> str:
    # ASCII digits in canonical form, so parse_uri gives back the same string
    canonical = native_amount == "0" or not native_amount.startswith("0")
    if not (native_amount.isascii() and native_amount.isdecimal() and canonical):
        raise MalformedUri(f"Native amount must be a canonical non-negative integer string, not {native_amount!r}")
    value = (Decimal(native_amount) / Decimal(multiplier)).normalize()
    return format(value, "f")


def _to_native(amount: str, multiplier: str) -> str:
    try:
        value = Decimal(amount)
    except InvalidOperation:
        raise MalformedUri(f"Unparsable amount: {amount!r}") from None
    if not value.is_finite() or value < 0:
        raise MalformedUri(f"Invalid amount: {amount!r}")

    try:
        native = value * Decimal(multiplier)
        # quantize fails once the amount needs more digits than the context precision
        whole = native.quantize(Decimal(1))
    except ArithmeticError as e:
        raise MalformedUri(f"Amount out of range: {amount!r}") from e
    if native != whole:
        raise MalformedUri(f"Amount {amount} is more precise than the smallest unit")
    return str(int(whole))


def encode_uri(request: PaymentRequest, network_id: str, currency_info: CurrencyInfo,
               registry: NetworkRegistry = NETWORKS) -> str:
    params = registry.lookup(network_id)
    if not request.public_address:
        raise InvalidAddress("Payment request has no address")
    if request.currency_code and request.currency_code != currency_info.currency_code:
        raise MalformedUri(f"Cannot encode a {request.currency_code} request as {currency_info.currency_code}")
    validate_address(request.public_address, params)

    query = []
    if request.native_amount is not None:
        query.append((URI.AMOUNT, _to_denomination(request.native_amount, currency_info.multiplier)))
    if request.label:
        query.append((URI.LABEL, request.label))
    if request.message:
        query.append((URI.MESSAGE, request.message))

    if not query:
        return request.public_address
    # A CashAddr address already carries the scheme as its prefix
    address = request.public_address
    if address.lower().startswith(currency_info.scheme + ":"):
        address = address[len(currency_info.scheme) + 1:]
    return f"{currency_info.scheme}:{address}?{urlencode(query, quote_via=quote)}"


def parse_uri(uri: str, network_id: str, currency_info: CurrencyInfo,
              registry: NetworkRegistry = NETWORKS) -> PaymentRequest:
    params = registry.lookup(network_id)
    text = uri.strip()

    scheme, sep, rest = text.partition(":")
    if sep:
        if scheme.lower() != currency_info.scheme:
            raise MalformedUri(f"URI scheme {scheme!r} is not {currency_info.scheme!r}")
        body = rest.removeprefix("//")
    else:
        body = text

    address, _, query = body.partition("?")
    address = unquote(address)
    if not address:
        raise MalformedUri(f"No address in {uri!r}")

    info = validate_address(address, params)
    request = PaymentRequest(public_address=to_new_format(address, params),
                             currency_code=currency_info.currency_code)
    if info.legacy:
        request.legacy_address = address

    fields = dict(parse_qsl(query, keep_blank_values=True))
    amount = fields.get(URI.AMOUNT)
    if amount is not None:
        request.native_amount = _to_native(amount, currency_info.multiplier)
    request.label = fields.get(URI.LABEL) or None
    request.message = fields.get(URI.MESSAGE) or None
    return request
