#mealcart/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mealcart.api.deps import (
    SERVICE_ERRORS,
    CurrentUser,
    get_current_user,
    get_meal_catalog,
    get_promo_catalog,
    to_http,
)
from mealcart.data.database import get_db
from mealcart.domain.schemas import (
    AddItemIn,
    CartMessageOut,
    CartOut,
    PromoIn,
    UpdateItemIn,
)
from mealcart.services.cart_service import UNSET, CartService
from mealcart.services.meal_catalog import MealCatalog
from mealcart.services.projector import empty_cart
from mealcart.services.promo_catalog import PromoCatalog

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(
    db: Session = Depends(get_db),
    meal_catalog: MealCatalog = Depends(get_meal_catalog),
    promo_catalog: PromoCatalog = Depends(get_promo_catalog),
) -> CartService:
    return CartService(db=db, meal_catalog=meal_catalog, promo_catalog=promo_catalog)


@router.get("", response_model=CartOut)
def get_cart(
    user: CurrentUser = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        return svc.project(svc.get_or_create_cart(user.id))
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.post("/add", response_model=CartMessageOut)
def add_item(
    payload: AddItemIn,
    user: CurrentUser = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        cart = svc.add_item(user.id, payload.meal_id, payload.quantity)
        return CartMessageOut(message="Item added to cart successfully", cart=svc.project(cart))
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.put("/update/{cart_item_id}", response_model=CartMessageOut)
def update_item(
    cart_item_id: int,
    payload: UpdateItemIn,
    user: CurrentUser = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    # absent field keeps the instructions, an explicit null/"" clears them
    if "special_instructions" in payload.model_fields_set:
        instructions = payload.special_instructions
    else:
        instructions = UNSET

    try:
        cart = svc.update_item(user.id, cart_item_id, payload.quantity, instructions)
        return CartMessageOut(message="Cart item updated successfully", cart=svc.project(cart))
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.delete("/remove/{cart_item_id}", response_model=CartMessageOut)
def remove_item(
    cart_item_id: int,
    user: CurrentUser = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        cart = svc.remove_item(user.id, cart_item_id)
        return CartMessageOut(message="Cart item removed successfully", cart=svc.project(cart))
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.delete("/clear", response_model=CartMessageOut)
def clear_cart(
    user: CurrentUser = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        svc.clear(user.id)
    except SERVICE_ERRORS as e:
        raise to_http(e)
    return CartMessageOut(message="Cart cleared successfully", cart=empty_cart())


@router.post("/promo", response_model=CartMessageOut)
def apply_promo(
    payload: PromoIn,
    user: CurrentUser = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        cart = svc.apply_promo(user.id, payload.code)
        return CartMessageOut(message="Promo code applied successfully", cart=svc.project(cart))
    except SERVICE_ERRORS as e:
        raise to_http(e)


@router.delete("/promo", response_model=CartMessageOut)
def remove_promo(
    user: CurrentUser = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        cart = svc.remove_promo(user.id)
        return CartMessageOut(message="Promo code removed successfully", cart=svc.project(cart))
    except SERVICE_ERRORS as e:
        raise to_http(e)
