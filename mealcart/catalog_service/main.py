# mealcart/catalog_service/main.py
from fastapi import FastAPI, HTTPException

app = FastAPI(title="Meal Catalog Service (dev mock)")


MEALS = {
    1: {
        "id": 1,
        "name": "Chicken Biryani",
        "price": 12.50,
        "chefId": 101,
        "chefName": "Asha Rao",
        "image": "/assets/images/biryani.jpg",
        "isAvailable": True,
    },
    2: {
        "id": 2,
        "name": "Vegetable Lasagna",
        "price": 10.00,
        "chefId": 102,
        "chefName": "Marco Bellini",
        "image": "/assets/images/lasagna.jpg",
        "isAvailable": True,
    },
    3: {
        "id": 3,
        "name": "Beef Pho",
        "price": 11.75,
        "chefId": 103,
        "chefName": "Linh Tran",
        "image": "/assets/images/pho.jpg",
        "isAvailable": False,
    },
}

@app.get("/meals/{meal_id}")
def get_meal(meal_id: int):
    meal = MEALS.get(meal_id)
    if not meal:
        raise HTTPException(status_code=404, detail="Meal not found")
    return meal
