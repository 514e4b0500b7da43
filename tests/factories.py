"""Builders for host-shaped cart input used across the tests."""
import json


def pricing_metafield(base_price, breaks=(), key="pricing"):
    """Build a combined `custom.pricebreaks` metafield."""
    payload = {
        key: {
            "base_price": {"amount": str(base_price)},
            "quantity_breaks": [
                {"minimum_quantity": str(minimum), "price": {"amount": str(price)}}
                for minimum, price in breaks
            ],
        }
    }
    return raw_metafield(json.dumps(payload))


def raw_metafield(value, namespace="custom", key="pricebreaks"):
    return {"namespace": namespace, "key": key, "value": value}


def surcharge_metafield(amount):
    return raw_metafield(str(amount), namespace="zakeke", key="price")


def cart_line(line_id, quantity, metafields=(), typename="ProductVariant"):
    return {
        "id": line_id,
        "quantity": quantity,
        "merchandise": {
            "__typename": typename,
            "id": f"gid://shopify/ProductVariant/{line_id}",
            "product": {"metafields": list(metafields)},
        },
    }


def cart_input(*lines):
    return {"cart": {"lines": list(lines)}}


def amounts(function_result):
    """Map cart line id -> fixed unit price amount."""
    return {
        op["update"]["cartLineId"]: op["update"]["price"]["adjustment"]["fixedPricePerUnit"]["amount"]
        for op in function_result["operations"]
    }
