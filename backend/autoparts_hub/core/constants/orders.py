"""
Order constants — saved-order history and message branding.
Version: 1.0.0
"""

# Only the newest saved orders are kept per user
SAVED_ORDERS_LIMIT: int = 20

STORE_NAME: str = "CASA FABIO"
STORE_SIGNATURE: str = "Distribuidora Casa Fabio - Autopartes"
MESSAGE_RULE: str = "━━━━━━━━━━━━━━━━━━"

WHATSAPP_BASE_URL: str = "https://wa.me/"

CSV_PRODUCT_HEADERS = [
    "Código", "Descripción", "Categoría", "Subcategoría", "Marca", "Precio Lista",
]
CSV_ORDER_HEADERS = [
    "Código", "Descripción", "Cantidad", "Ganancia %", "Precio Unitario", "Subtotal",
]
