from fastapi import APIRouter, Depends, File, Form, UploadFile

from storefront.core.auth import get_current_session
from storefront.core.state import get_cart, get_checkout_wizard
from storefront.core.storage import KeyValueStorage
from storefront.database import get_storage
from storefront.models.user import SessionUser
from storefront.schemas.checkout import CheckoutRead, ShippingOptionRead, ShippingSelection
from storefront.services.cart_service import CartState
from storefront.services.checkout_service import CheckoutWizard, ReceiptFile

router = APIRouter(prefix="/checkout", tags=["Checkout"])


@router.get("", response_model=CheckoutRead)
def get_checkout(
    cart: CartState = Depends(get_cart),
    wizard: CheckoutWizard = Depends(get_checkout_wizard),
):
    """
    Current wizard step, totals and any inline error.
    """
    return wizard.to_read(cart)


@router.get("/shipping-options", response_model=list[ShippingOptionRead])
def list_shipping_options(
    cart: CartState = Depends(get_cart),
    wizard: CheckoutWizard = Depends(get_checkout_wizard),
):
    return wizard.to_read(cart).shipping_options


@router.post("/start", response_model=CheckoutRead)
def start_checkout(
    cart: CartState = Depends(get_cart),
    wizard: CheckoutWizard = Depends(get_checkout_wizard),
):
    """
    Open a fresh wizard (closes the cart panel, like the Checkout button).
    """
    wizard.reset()
    cart.close_panel()
    return wizard.to_read(cart)


@router.put("/shipping", response_model=CheckoutRead)
def select_shipping(
    payload: ShippingSelection,
    cart: CartState = Depends(get_cart),
    wizard: CheckoutWizard = Depends(get_checkout_wizard),
):
    """
    Pick a shipping option; the final total follows.
    """
    wizard.select_shipping(payload.shipping_option_id)
    return wizard.to_read(cart)


@router.put("/payment", response_model=CheckoutRead)
async def set_payment_details(
    phone_number: str = Form(""),
    guest_email: str | None = Form(None),
    receipt: UploadFile | None = File(None),
    cart: CartState = Depends(get_cart),
    wizard: CheckoutWizard = Depends(get_checkout_wizard),
):
    """
    Payment step inputs (multipart form).

    - phone_number: contact phone
    - guest_email: only used when nobody is logged in
    - receipt: payment receipt image; omit to keep the previous upload
    """
    receipt_file = None
    if receipt is not None and receipt.filename:
        receipt_file = ReceiptFile(
            filename=receipt.filename,
            content=await receipt.read(),
            content_type=receipt.content_type,
        )
    wizard.set_payment_details(phone_number, guest_email, receipt_file)
    return wizard.to_read(cart)


@router.post("/next", response_model=CheckoutRead)
def next_step(
    cart: CartState = Depends(get_cart),
    wizard: CheckoutWizard = Depends(get_checkout_wizard),
):
    wizard.next()
    return wizard.to_read(cart)


@router.post("/back", response_model=CheckoutRead)
def previous_step(
    cart: CartState = Depends(get_cart),
    wizard: CheckoutWizard = Depends(get_checkout_wizard),
):
    wizard.back()
    return wizard.to_read(cart)


@router.post("/submit", response_model=CheckoutRead)
async def submit_checkout(
    storage: KeyValueStorage = Depends(get_storage),
    cart: CartState = Depends(get_cart),
    wizard: CheckoutWizard = Depends(get_checkout_wizard),
    session: SessionUser | None = Depends(get_current_session),
):
    """
    Verify the receipt and place the order.

    - 200 with status SUCCESS and `order_id` when the receipt is accepted
      (the cart is emptied).
    - 200 with status ERROR and `error_message` when it is rejected or
      the verifier fails; nothing is stored and the wizard stays on review.
    - 400 for missing inputs, 409 while another submission is running.
    """
    await wizard.submit(storage, cart, session)
    return wizard.to_read(cart)
