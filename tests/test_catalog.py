from __future__ import annotations

from decimal import Decimal

import pytest

from primor_pos.data import Catalog, find_user, guest_user
from primor_pos.errors import CatalogError
from primor_pos.models import Category, ComplementGroup, ComplementItem, Product, UserRole

SAUCE = ComplementItem(id="s1", name="Barbecue", price=Decimal("1.00"))


class TestComplementGroupBounds:
    def test_min_above_max_rejected(self):
        with pytest.raises(CatalogError):
            ComplementGroup(id="g", name="Molho", min_choices=2, max_choices=1, items=(SAUCE,))

    def test_max_above_item_count_rejected(self):
        with pytest.raises(CatalogError):
            ComplementGroup(id="g", name="Molho", min_choices=0, max_choices=3, items=(SAUCE,))

    def test_required_single_choice(self):
        group = ComplementGroup(id="g", name="Molho", min_choices=1, max_choices=1, items=(SAUCE,))

        assert group.is_required
        assert group.is_single_choice


class TestCatalog:
    def test_seed_contents(self):
        catalog = Catalog.seeded()

        assert len(catalog) == 6
        assert catalog.categories() == [Category.FRITOS, Category.COMBOS, Category.BEBIDAS, Category.ASSADOS]
        assert [product.id for product in catalog.by_category(Category.FRITOS)] == ["p1", "p3"]

    def test_groups_for_skips_deleted_groups(self):
        catalog = Catalog.seeded()
        product = catalog.product("p5")

        assert catalog.delete_complement_group("g3") is True

        assert [group.id for group in catalog.groups_for(product)] == ["g2"]
        assert product.complement_group_ids == ("g3", "g2")

    def test_duplicate_product_rejected(self):
        catalog = Catalog.seeded()
        clash = Product(id="p1", name="Outro", description="", price=Decimal("1.00"), category=Category.FRITOS)

        with pytest.raises(CatalogError):
            catalog.add_product(clash)

    def test_delete_missing_product(self):
        assert Catalog.seeded().delete_product("p404") is False


class TestUsers:
    @pytest.mark.parametrize("typed", ["admin", "  ADMIN ", "Admin"])
    def test_find_user_normalizes_input(self, typed):
        user = find_user(typed)

        assert user is not None
        assert user.role == UserRole.ADMIN

    def test_find_user_unknown(self):
        assert find_user("gerente") is None

    def test_guest_user_for_role_without_account(self):
        user = guest_user(UserRole.CUSTOMER)

        assert user.username == "guest"
        assert user.role == UserRole.CUSTOMER
