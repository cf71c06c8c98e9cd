"""Tests for owner address resolution."""

import pytest

from slugregistry.domain.owner_context import (
    CollectionItem,
    Localized,
    OwnerAddress,
    PlainRecord,
    SubBlockVariant,
    load_filter,
    resolve_address,
)


class TestResolveAddress:
    def test_plain_record(self):
        assert resolve_address(PlainRecord(1)) == OwnerAddress("object", None, None)

    def test_collection_item(self):
        assert resolve_address(CollectionItem(1, "variants", 2)) == OwnerAddress(
            "fieldcollection", "variants", "2"
        )

    def test_sub_block_variant(self):
        assert resolve_address(SubBlockVariant(1, "bricks", "Seo")) == OwnerAddress(
            "objectbrick", "bricks", "Seo"
        )

    def test_localized(self):
        assert resolve_address(Localized(1, "de")) == OwnerAddress(
            "localizedfield", None, "de"
        )

    def test_localized_in_collection_item(self):
        ctx = Localized(1, "en", CollectionItem(1, "variants", 0))
        assert resolve_address(ctx) == OwnerAddress(
            "localizedfield", "/fieldcollection~variants/0/", "en"
        )

    def test_localized_in_sub_block(self):
        ctx = Localized(1, "en", SubBlockVariant(1, "bricks", "Seo"))
        assert resolve_address(ctx) == OwnerAddress(
            "localizedfield", "/objectbrick~bricks/Seo/", "en"
        )

    def test_deterministic(self):
        ctx = Localized(7, "fr", CollectionItem(7, "items", 3))
        assert resolve_address(ctx) == resolve_address(
            Localized(7, "fr", CollectionItem(7, "items", 3))
        )

    def test_unknown_context(self):
        with pytest.raises(TypeError):
            resolve_address(object())


class TestLoadFilter:
    def test_plain_record_matches_address(self):
        assert load_filter(PlainRecord(1)) == resolve_address(PlainRecord(1))

    def test_collection_item_matches_address(self):
        ctx = CollectionItem(1, "variants", 2)
        assert load_filter(ctx) == resolve_address(ctx)

    def test_top_level_localized_excludes_nested_rows(self):
        assert load_filter(Localized(1, "de")).ownername == ""

    def test_localized_in_collection_item_uses_index_prefix(self):
        ctx = Localized(1, "en", CollectionItem(1, "variants", 0))
        assert load_filter(ctx) == OwnerAddress(
            "localizedfield", "/fieldcollection~variants/0/%", "en"
        )

    def test_localized_in_sub_block_uses_field_prefix(self):
        ctx = Localized(1, "en", SubBlockVariant(1, "bricks", "Seo"))
        assert load_filter(ctx) == OwnerAddress(
            "localizedfield", "/objectbrick~bricks/%", "en"
        )

    def test_prefix_escapes_like_wildcards(self):
        ctx = Localized(1, "en", CollectionItem(1, "my_items", 0))
        assert load_filter(ctx).ownername == "/fieldcollection~my\\_items/0/%"

    def test_prefix_escapes_percent_in_sub_block_field(self):
        ctx = Localized(1, "en", SubBlockVariant(1, "100%", "Seo"))
        assert load_filter(ctx).ownername == "/objectbrick~100\\%/%"
