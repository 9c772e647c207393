"""
Manual UPI payment: a upi://pay deep link rendered as a QR code.

Scanning the code opens the customer's bank app with the payee and amount
filled in. Nothing reports back to us, so the matching payment row stays
"pending" until an admin checks the bank statement and updates it.
"""
import base64
from io import BytesIO
from urllib.parse import urlencode, quote

import qrcode


def build_upi_uri(vpa: str, amount: int, payee_name: str = "", note: str = "") -> str:
    """
    upi://pay?pa=<vpa>&pn=<name>&am=<amount>&cu=INR&tn=<note>
    Amount is whole rupees, written with two decimals as UPI apps expect.
    """
    params = {"pa": vpa}
    if payee_name:
        params["pn"] = payee_name
    params["am"] = f"{amount:.2f}"
    params["cu"] = "INR"
    if note:
        params["tn"] = note
    # '@' must survive unescaped in the VPA
    return "upi://pay?" + urlencode(params, quote_via=quote, safe="@")


def render_qr_data_uri(data: str) -> str:
    """PNG QR code as a data: URI, ready for an <img src>."""
    qr = qrcode.QRCode(box_size=10, border=4)
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = BytesIO()
    img.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
