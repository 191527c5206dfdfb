"""
Schema registry: named response/request contracts built on jsonschema.

Each SchemaContract wraps one JSON Schema from schemas.py plus optional
relational invariants (checks that span several fields, like
"discountedTotal <= total"). Validation is total: a value either satisfies
every required field, type, format and invariant, or it fails and the
failure lists every violation found, not only the first one.

    result = CART.validate(body)
    if not result.ok:
        print(result.describe())

    cart = CART.parse(body)     # raises SchemaValidationError instead
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from jsonschema import Draft7Validator, FormatChecker
from jsonschema.exceptions import ValidationError

import schemas
from errors import SchemaValidationError
from logging_helper import log_status

# an invariant returns None when it holds, else one message or a list of them
Invariant = Callable[[Any], Union[None, str, List[str]]]


@dataclass(frozen=True)
class FieldError:
    path: str
    constraint: str
    message: str

    def __str__(self):
        return f"{self.path}: [{self.constraint}] {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    contract: str
    value: Any
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def describe(self) -> str:
        if self.ok:
            return f"{self.contract}: valid"
        lines = [f"{self.contract}: {len(self.errors)} violation(s)"]
        lines.extend(f"  - {e}" for e in self.errors)
        return "\n".join(lines)


def _path_of(error: ValidationError) -> str:
    parts = ["$"]
    for p in error.absolute_path:
        parts.append(f"[{p}]" if isinstance(p, int) else f".{p}")
    path = "".join(parts)
    # a missing required field is reported on the parent object
    if error.validator == "required":
        missing = error.message.split("'")[1] if "'" in error.message else ""
        if missing:
            path = f"{path}.{missing}"
    return path


def _field_error(error: ValidationError) -> FieldError:
    constraint = error.validator
    if constraint == "format":
        constraint = f"format:{error.validator_value}"
    return FieldError(path=_path_of(error), constraint=constraint, message=error.message)


class SchemaContract:
    """A named, immutable structural contract for one JSON shape."""

    def __init__(self, name: str, schema: Dict[str, Any], invariants: Sequence[Invariant] = ()):
        Draft7Validator.check_schema(schema)
        self.name = name
        self.schema = schema
        self.invariants = tuple(invariants)
        self._validator = Draft7Validator(schema, format_checker=FormatChecker())

    def __repr__(self):
        return f"SchemaContract({self.name!r})"

    def validate(self, value: Any) -> ValidationResult:
        errors = [
            _field_error(e)
            for e in sorted(self._validator.iter_errors(value), key=lambda e: list(map(str, e.absolute_path)))
        ]
        # invariants assume the structure is sound
        if not errors:
            for check in self.invariants:
                found = check(value) or []
                if isinstance(found, str):
                    found = [found]
                errors.extend(FieldError(path="$", constraint="invariant", message=m) for m in found)
        return ValidationResult(contract=self.name, value=value, errors=errors)

    def is_valid(self, value: Any) -> bool:
        return self.validate(value).ok

    def parse(self, value: Any) -> Any:
        result = self.validate(value)
        if not result.ok:
            log_status("error", "Contract violation: ", result.describe())
            raise SchemaValidationError(self.name, result.errors)
        return result.value


# -----------------------------
# Relational invariants
# -----------------------------

def discounted_total_within_total(cart: Dict[str, Any]) -> Optional[str]:
    if cart["discountedTotal"] > cart["total"]:
        return f"discountedTotal {cart['discountedTotal']} exceeds total {cart['total']}"
    return None


def total_products_matches_lines(cart: Dict[str, Any]) -> Optional[str]:
    if cart["totalProducts"] != len(cart["products"]):
        return f"totalProducts {cart['totalProducts']} != {len(cart['products'])} product lines"
    return None


def total_quantity_matches_lines(cart: Dict[str, Any]) -> Optional[str]:
    quantity = sum(line["quantity"] for line in cart["products"])
    if cart["totalQuantity"] != quantity:
        return f"totalQuantity {cart['totalQuantity']} != sum of line quantities {quantity}"
    return None


CART_INVARIANTS = (
    discounted_total_within_total,
    total_products_matches_lines,
    total_quantity_matches_lines,
)


def every_cart(cart_list: Dict[str, Any]) -> List[str]:
    messages = []
    for i, c in enumerate(cart_list["carts"]):
        for check in CART_INVARIANTS:
            message = check(c)
            if message:
                messages.append(f"carts[{i}] (id={c['id']}): {message}")
    return messages


def page_within_limit(key: str) -> Invariant:
    def check(page: Dict[str, Any]) -> Optional[str]:
        # limit=0 asks for every item
        if page["limit"] and len(page[key]) > page["limit"]:
            return f"{len(page[key])} {key} returned but limit is {page['limit']}"
        return None
    return check


LOGIN_REQUEST = SchemaContract("LoginRequest", schemas.login_request)
LOGIN_RESPONSE = SchemaContract("LoginResponse", schemas.login_response)
TOKEN_REFRESH = SchemaContract("TokenRefresh", schemas.token_refresh)
PRODUCT = SchemaContract("Product", schemas.product)
PRODUCT_LIST = SchemaContract("ProductList", schemas.product_list, [page_within_limit("products")])
CATEGORY = SchemaContract("Category", schemas.category)
CATEGORY_LIST = SchemaContract("CategoryList", schemas.category_list)
CART = SchemaContract("Cart", schemas.cart, CART_INVARIANTS)
CART_LIST = SchemaContract("CartList", schemas.cart_list, [every_cart, page_within_limit("carts")])
DELETED_CART = SchemaContract("DeletedCart", schemas.deleted_cart, CART_INVARIANTS)
ADD_CART_REQUEST = SchemaContract("AddCartRequest", schemas.add_cart_request)
UPDATE_CART_REQUEST = SchemaContract("UpdateCartRequest", schemas.update_cart_request)
USER = SchemaContract("User", schemas.user)
USER_LIST = SchemaContract("UserList", schemas.user_list, [page_within_limit("users")])
ERROR = SchemaContract("Error", schemas.error)

CONTRACTS = {
    c.name: c
    for c in (
        LOGIN_REQUEST, LOGIN_RESPONSE, TOKEN_REFRESH, PRODUCT, PRODUCT_LIST,
        CATEGORY, CATEGORY_LIST, CART, CART_LIST, DELETED_CART,
        ADD_CART_REQUEST, UPDATE_CART_REQUEST, USER, USER_LIST, ERROR,
    )
}


def get_contract(name: str) -> SchemaContract:
    try:
        return CONTRACTS[name]
    except KeyError:
        raise KeyError(f"Unknown contract {name!r}. Known: {', '.join(sorted(CONTRACTS))}") from None
