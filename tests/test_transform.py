from hi5.etl import transform


def _yelp_business(name, rating, **extra):
    business = {
        "id": name.lower(),
        "name": name,
        "image_url": f"https://img.example/{name}.jpg",
        "url": f"https://www.yelp.com/biz/{name.lower()}",
        "review_count": 120,
        "price": "$$",
        "rating": rating,
        "location": {"display_address": ["123 Main St", "Los Angeles, CA 90012"]},
        "coordinates": {"latitude": 34.0, "longitude": -118.2},
    }
    business.update(extra)
    return business


def test_to_business_maps_fields():
    business = transform.to_business(_yelp_business("Pizzeria", 4.5))

    assert business.name == "Pizzeria"
    assert business.image_url == "https://img.example/Pizzeria.jpg"
    assert business.url == "https://www.yelp.com/biz/pizzeria"
    assert business.review_count == 120
    assert business.price == "$$"
    assert business.rating == 4.5
    assert business.display_address == ("123 Main St", "Los Angeles, CA 90012")


def test_to_business_tolerates_missing_fields():
    business = transform.to_business({"name": "Bare"})

    assert business.price == ""
    assert business.rating == 0.0
    assert business.review_count == 0
    assert business.display_address == ()


def test_to_businesses_keeps_api_order():
    payload = {"businesses": [_yelp_business("Second", 4.0), _yelp_business("First", 5.0)], "total": 2}

    businesses = transform.to_businesses(payload)

    assert [b.name for b in businesses] == ["Second", "First"]


def test_to_businesses_handles_missing_list():
    assert transform.to_businesses({}) == []
    assert transform.to_businesses(None) == []
    assert transform.to_businesses({"businesses": None}) == []
    assert transform.to_businesses({"businesses": ["junk", {"name": "Ok"}]})[0].name == "Ok"


def test_to_business_tolerates_malformed_location():
    assert transform.to_business({"name": "A", "location": "1 Main St"}).display_address == ()
    assert transform.to_business({"name": "A", "location": None}).display_address == ()

    business = transform.to_business({"name": "A", "location": {"display_address": "1 Main St"}})
    assert business.display_address == ("1 Main St",)

    business = transform.to_business({"name": "A", "location": {"display_address": 42}})
    assert business.display_address == ()


def test_to_business_tolerates_non_finite_review_count():
    assert transform.to_business({"name": "A", "review_count": float("inf")}).review_count == 0
