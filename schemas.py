login_request = {
    "type": "object",
    "required": ["username", "password"],
    "properties": {
        "username": {
            "type": "string"
        },
        "password": {
            "type": "string"
        },
        "expiresInMins": {
            "type": "number"
        }
    }
}


login_response = {
    "type": "object",
    "required": [
        "id", "username", "email", "firstName", "lastName",
        "gender", "image", "accessToken", "refreshToken"
    ],
    "properties": {
        "id": {
            "type": "integer"
        },
        "username": {
            "type": "string"
        },
        "email": {
            "type": "string",
            "format": "email"
        },
        "firstName": {
            "type": "string"
        },
        "lastName": {
            "type": "string"
        },
        "gender": {
            "type": "string"
        },
        "image": {
            "type": "string",
            "format": "uri"
        },
        "accessToken": {
            "type": "string",
            "minLength": 1
        },
        "refreshToken": {
            "type": "string",
            "minLength": 1
        },
        # older API versions answered with "token"
        "token": {
            "type": "string"
        }
    }
}


token_refresh = {
    "type": "object",
    "required": ["accessToken", "refreshToken"],
    "properties": {
        "accessToken": {
            "type": "string",
            "minLength": 1
        },
        "refreshToken": {
            "type": "string",
            "minLength": 1
        }
    }
}


product = {
    "type": "object",
    "required": [
        "id", "title", "description", "price", "discountPercentage",
        "rating", "stock", "category", "thumbnail", "images"
    ],
    "properties": {
        "id": {
            "type": "integer"
        },
        "title": {
            "type": "string"
        },
        "description": {
            "type": "string"
        },
        "price": {
            "type": "number"
        },
        "discountPercentage": {
            "type": "number"
        },
        "rating": {
            "type": "number"
        },
        "stock": {
            "type": "integer"
        },
        # groceries and a few other categories ship without a brand
        "brand": {
            "type": "string"
        },
        "category": {
            "type": "string"
        },
        "tags": {
            "type": "array",
            "items": {"type": "string"}
        },
        "thumbnail": {
            "type": "string",
            "format": "uri"
        },
        "images": {
            "type": "array",
            "items": {"type": "string", "format": "uri"}
        }
    }
}


def _page_of(key, item_schema):
    return {
        "type": "object",
        "required": [key, "total", "skip", "limit"],
        "properties": {
            key: {
                "type": "array",
                "items": item_schema
            },
            "total": {
                "type": "integer"
            },
            "skip": {
                "type": "integer"
            },
            "limit": {
                "type": "integer"
            }
        }
    }


product_list = _page_of("products", product)


category = {
    "type": "object",
    "required": ["slug", "name", "url"],
    "properties": {
        "slug": {
            "type": "string"
        },
        "name": {
            "type": "string"
        },
        "url": {
            "type": "string",
            "format": "uri"
        }
    }
}


category_list = {
    "type": "array",
    "items": category
}


cart_product = {
    "type": "object",
    "required": ["id", "title", "price", "quantity", "total", "discountPercentage"],
    "properties": {
        "id": {
            "type": "integer"
        },
        "title": {
            "type": "string"
        },
        "price": {
            "type": "number"
        },
        "quantity": {
            "type": "integer"
        },
        "total": {
            "type": "number"
        },
        "discountPercentage": {
            "type": "number"
        },
        "discountedTotal": {
            "type": "number"
        },
        # renamed to discountedTotal by later API versions
        "discountedPrice": {
            "type": "number"
        },
        "thumbnail": {
            "type": "string"
        }
    }
}


cart = {
    "type": "object",
    "required": [
        "id", "products", "total", "discountedTotal",
        "userId", "totalProducts", "totalQuantity"
    ],
    "properties": {
        "id": {
            "type": "integer"
        },
        "products": {
            "type": "array",
            "items": cart_product
        },
        "total": {
            "type": "number"
        },
        "discountedTotal": {
            "type": "number"
        },
        "userId": {
            "type": "integer"
        },
        "totalProducts": {
            "type": "integer"
        },
        "totalQuantity": {
            "type": "integer"
        }
    }
}


cart_list = _page_of("carts", cart)


deleted_cart = {
    **cart,
    "required": cart["required"] + ["isDeleted", "deletedOn"],
    "properties": {
        **cart["properties"],
        "isDeleted": {
            "type": "boolean",
            "const": True
        },
        "deletedOn": {
            "type": "string"
        }
    }
}


cart_line = {
    "type": "object",
    "required": ["id", "quantity"],
    "properties": {
        "id": {
            "type": "integer"
        },
        "quantity": {
            "type": "integer",
            "minimum": 1
        }
    }
}


add_cart_request = {
    "type": "object",
    "required": ["userId", "products"],
    "properties": {
        "userId": {
            "type": "integer"
        },
        "products": {
            "type": "array",
            "items": cart_line
        }
    }
}


update_cart_request = {
    "type": "object",
    "required": ["products"],
    "properties": {
        "merge": {
            "type": "boolean"
        },
        "products": {
            "type": "array",
            "items": cart_line
        }
    }
}


user = {
    "type": "object",
    "required": [
        "id", "firstName", "lastName", "age", "gender", "email",
        "phone", "username", "birthDate", "image"
    ],
    "properties": {
        "id": {
            "type": "integer"
        },
        "firstName": {
            "type": "string"
        },
        "lastName": {
            "type": "string"
        },
        "maidenName": {
            "type": "string"
        },
        "age": {
            "type": "integer"
        },
        "gender": {
            "type": "string"
        },
        "email": {
            "type": "string",
            "format": "email"
        },
        "phone": {
            "type": "string"
        },
        "username": {
            "type": "string"
        },
        "birthDate": {
            "type": "string"
        },
        "image": {
            "type": "string",
            "format": "uri"
        },
        "bloodGroup": {
            "type": "string"
        },
        "height": {
            "type": "number"
        },
        "weight": {
            "type": "number"
        },
        "eyeColor": {
            "type": "string"
        },
        "hair": {
            "type": "object",
            "required": ["color", "type"],
            "properties": {
                "color": {
                    "type": "string"
                },
                "type": {
                    "type": "string"
                }
            }
        }
    }
}


user_list = _page_of("users", user)


error = {
    "type": "object",
    "required": ["message"],
    "properties": {
        "message": {
            "type": "string",
            "minLength": 1
        }
    }
}
