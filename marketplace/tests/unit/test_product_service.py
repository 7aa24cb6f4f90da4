from decimal import Decimal

import pytest

from marketplace.domain.models import Category
from marketplace.services.base import CreateProductError, DeleteProductError, GetProductError, UpdateProductError
from marketplace.services.product_service import MAX_DESCRIPTION_LENGTH, MAX_IMAGE_SIZE_BYTES

from ..factories import BASE_TIME, ProductFactory, UserFactory

OWNER = "owner-1"


def create(service, **overrides):
    fields = {
        "name": "Dumbbell Set",
        "description": "Adjustable dumbbells",
        "price": Decimal("49.99"),
        "category": Category.STRENGTH,
        "owner_id": OWNER,
        "images": None,
    }
    fields.update(overrides)
    return service.create_product(**fields)


@pytest.mark.unit
class TestCreateProduct:
    def test_create_product_success(self, product_service, repositories):
        result = create(product_service, images=["img-a", "img-b"])

        assert result.ok is True
        product = result.value
        assert product.id == "id-1"
        assert product.name == "Dumbbell Set"
        assert product.price == Decimal("49.99")
        assert product.category is Category.STRENGTH
        assert product.owner_id == OWNER
        assert product.images == ("img-a", "img-b")
        assert product.created_at > BASE_TIME
        assert repositories.products.find_by_id(product.id) == product

    def test_price_kept_exactly(self, product_service):
        result = create(product_service, price=Decimal("0.10"))

        assert result.value.price == Decimal("0.10")
        assert str(result.value.price) == "0.10"

    def test_price_and_category_accept_strings(self, product_service):
        result = create(product_service, price="12.50", category="home_gym")

        assert result.ok is True
        assert result.value.price == Decimal("12.50")
        assert result.value.category is Category.HOME_GYM

    def test_blank_description_stored_as_none(self, product_service):
        result = create(product_service, description="   ")

        assert result.ok is True
        assert result.value.description is None

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_name_required(self, product_service, name):
        result = create(product_service, name=name)

        assert result.ok is False
        assert result.error is CreateProductError.NAME_REQUIRED

    @pytest.mark.parametrize("price", [None, "abc"])
    def test_price_required(self, product_service, price):
        result = create(product_service, price=price)

        assert result.error is CreateProductError.PRICE_REQUIRED

    @pytest.mark.parametrize("price", [0, Decimal("0"), -5, Decimal("-0.01")])
    def test_price_must_be_positive(self, product_service, price):
        result = create(product_service, price=price)

        assert result.error is CreateProductError.PRICE_MUST_BE_POSITIVE

    @pytest.mark.parametrize("category", [None, "spaceship"])
    def test_category_required(self, product_service, category):
        result = create(product_service, category=category)

        assert result.error is CreateProductError.CATEGORY_REQUIRED

    def test_description_too_long(self, product_service):
        result = create(product_service, description="x" * (MAX_DESCRIPTION_LENGTH + 1))

        assert result.error is CreateProductError.DESCRIPTION_TOO_LONG

    def test_description_at_limit_is_accepted(self, product_service):
        result = create(product_service, description="x" * MAX_DESCRIPTION_LENGTH)

        assert result.ok is True

    def test_too_many_images(self, product_service):
        result = create(product_service, images=["a", "b", "c", "d"])

        assert result.error is CreateProductError.TOO_MANY_IMAGES

    def test_image_too_large(self, product_service):
        result = create(product_service, images=["a", "x" * (MAX_IMAGE_SIZE_BYTES + 1)])

        assert result.error is CreateProductError.IMAGE_TOO_LARGE

    def test_single_image_string(self, product_service):
        result = create(product_service, images="data:image/png;base64,AAAA")

        assert result.ok is True
        assert result.value.images == ("data:image/png;base64,AAAA",)

    def test_blank_image_string(self, product_service):
        assert create(product_service, images="  ").value.images == ()

    def test_single_oversized_image_string(self, product_service):
        result = create(product_service, images="x" * (MAX_IMAGE_SIZE_BYTES + 1))

        assert result.error is CreateProductError.IMAGE_TOO_LARGE

    def test_first_failing_check_wins(self, product_service):
        result = create(
            product_service,
            price=-1,
            category=None,
            description="x" * (MAX_DESCRIPTION_LENGTH + 1),
            images=["a", "b", "c", "d"],
        )
        assert result.error is CreateProductError.PRICE_MUST_BE_POSITIVE

        result = create(
            product_service,
            category=None,
            description="x" * (MAX_DESCRIPTION_LENGTH + 1),
        )
        assert result.error is CreateProductError.CATEGORY_REQUIRED

        result = create(
            product_service,
            description="x" * (MAX_DESCRIPTION_LENGTH + 1),
            images=["a", "b", "c", "d"],
        )
        assert result.error is CreateProductError.DESCRIPTION_TOO_LONG

        result = create(product_service, images=["x" * (MAX_IMAGE_SIZE_BYTES + 1)] * 4)
        assert result.error is CreateProductError.TOO_MANY_IMAGES

    def test_invalid_input_persists_nothing(self, product_service, repositories):
        create(product_service, name="")

        assert repositories.products.find_all() == []


@pytest.mark.unit
class TestUpdateProduct:
    def test_update_product_success(self, product_service):
        original = create(product_service).value

        result = product_service.update_product(
            original.id,
            OWNER,
            name="Kettlebell",
            description="Cast iron",
            price=Decimal("30"),
            category=Category.CORE,
            images=["img"],
        )

        assert result.ok is True
        updated = result.value
        assert updated.id == original.id
        assert updated.owner_id == OWNER
        assert updated.created_at == original.created_at
        assert updated.name == "Kettlebell"
        assert updated.price == Decimal("30")
        assert updated.category is Category.CORE
        assert updated.images == ("img",)
        assert product_service.find_by_id(original.id) == updated

    def test_update_with_single_image_string(self, product_service):
        original = create(product_service).value

        result = product_service.update_product(
            original.id, OWNER, "Kettlebell", None, Decimal("30"), Category.CORE, images="img"
        )

        assert result.value.images == ("img",)

    def test_update_not_found(self, product_service):
        result = product_service.update_product("missing", OWNER, "n", None, Decimal("1"), Category.CORE)

        assert result.error is UpdateProductError.NOT_FOUND

    def test_non_owner_gets_not_owner_even_with_invalid_fields(self, product_service):
        product = create(product_service).value

        result = product_service.update_product(
            product.id,
            "someone-else",
            name="",
            description="x" * (MAX_DESCRIPTION_LENGTH + 1),
            price=-3,
            category=None,
            images=["a", "b", "c", "d"],
        )

        assert result.error is UpdateProductError.NOT_OWNER

    def test_update_validation_uses_update_errors(self, product_service):
        product = create(product_service).value

        result = product_service.update_product(product.id, OWNER, "Bar", None, 0, Category.CORE)

        assert result.error is UpdateProductError.PRICE_MUST_BE_POSITIVE

    def test_failed_update_leaves_product_unchanged(self, product_service):
        product = create(product_service).value

        product_service.update_product(product.id, OWNER, "", None, Decimal("1"), Category.CORE)

        assert product_service.find_by_id(product.id) == product


@pytest.mark.unit
class TestDeleteProduct:
    def test_delete_product_success(self, product_service):
        product = create(product_service).value

        result = product_service.delete_product(product.id, OWNER)

        assert result.ok is True
        assert product_service.find_by_id(product.id) is None

    def test_delete_not_found(self, product_service):
        result = product_service.delete_product("missing", OWNER)

        assert result.error is DeleteProductError.NOT_FOUND

    def test_delete_not_owner(self, product_service):
        product = create(product_service).value

        result = product_service.delete_product(product.id, "intruder")

        assert result.error is DeleteProductError.NOT_OWNER
        assert product_service.find_by_id(product.id) == product

    def test_delete_removes_favorites_of_product(self, product_service, favorite_service, repositories):
        product = create(product_service).value
        favorite_service.add_favorite("fan-1", product.id)
        favorite_service.add_favorite("fan-2", product.id)

        product_service.delete_product(product.id, OWNER)

        assert repositories.favorites.find_by_user_id("fan-1") == []
        assert repositories.favorites.find_by_user_id("fan-2") == []


@pytest.mark.unit
class TestProductQueries:
    def test_search_is_case_insensitive(self, product_service):
        create(product_service, name="DUMBBELL Set")
        create(product_service, name="Yoga Mat", description="Non-slip", category=Category.MOBILITY)

        results = product_service.search(query="dumbbell", category=None, limit=20, offset=0)

        assert [product.name for product in results] == ["DUMBBELL Set"]

    def test_search_page_reports_total(self, product_service):
        for index in range(5):
            create(product_service, name=f"Band {index}")

        page = product_service.search_page(query="band", limit=2, offset=2)

        assert page.total == 5
        assert page.limit == 2
        assert page.offset == 2
        assert [product.name for product in page.items] == ["Band 2", "Band 1"]
        assert page.has_next is True

    def test_get_product_detail_includes_seller(self, product_service, repositories):
        seller = repositories.users.save(UserFactory(first_name="Ada", last_name="Lovelace", phone_number="123"))
        product = create(product_service, owner_id=seller.id).value

        result = product_service.get_product_detail(product.id)

        assert result.ok is True
        assert result.value.product == product
        assert result.value.seller.id == seller.id
        assert result.value.seller.first_name == "Ada"
        assert result.value.seller.phone_number == "123"

    def test_get_product_detail_without_seller_record(self, product_service, repositories):
        product = repositories.products.save(ProductFactory(owner_id="gone"))

        result = product_service.get_product_detail(product.id)

        assert result.value.seller.id == "gone"
        assert result.value.seller.first_name == ""

    def test_get_product_detail_not_found(self, product_service):
        result = product_service.get_product_detail("missing")

        assert result.error is GetProductError.NOT_FOUND

    def test_list_categories(self, product_service):
        categories = dict(product_service.list_categories())

        assert categories["HOME_GYM"] == "Home Gym"
        assert categories["OUTDOOR"] == "Outdoor/Functional"
        assert len(categories) == 10
