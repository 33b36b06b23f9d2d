import uuid
from pathlib import Path

import pytest

from catalog.infrastructure.storage import LocalAssetStore
from catalog.modules.products import (
    ProductDraft,
    ProductError,
    ProductNotFoundError,
    ProductPatch,
    ProductService,
    ProductStorageError,
    ProductValidationError,
    UploadedAsset,
)


async def test_create_stores_normalized_asset_paths(service: ProductService, make_upload, asset_file) -> None:
    uploads = [make_upload(), make_upload(suffix=".png"), make_upload(suffix=".pdf")]

    product = await service.create_product(ProductDraft(name="Lamp", price=1000, colors=["Red"]), uploads)

    assert not isinstance(product, ProductError)
    assert len(product.asset_paths) == len(uploads)
    assert all(path.startswith("uploads/") for path in product.asset_paths)
    assert all(asset_file(path).is_file() for path in product.asset_paths)


async def test_create_without_uploads(service: ProductService) -> None:
    product = await service.create_product(ProductDraft(name="Lamp", price=1000))
    assert product.asset_paths == []


async def test_create_failure_deletes_uploaded_files(service: ProductService, make_upload) -> None:
    uploads = [make_upload(), make_upload()]

    result = await service.create_product(ProductDraft(name="Broken", price=-1), uploads)

    assert isinstance(result, ProductStorageError)
    assert not result.client_fault
    assert all(not Path(upload.temp_path).exists() for upload in uploads)


async def test_create_failure_leaves_no_record(service: ProductService, make_upload) -> None:
    await service.create_product(ProductDraft(name="", price=10), [make_upload()])

    products = [product async for product in service.list_products()]
    assert products == []


async def test_update_replaces_all_assets(service: ProductService, make_upload, asset_file) -> None:
    created = await service.create_product(
        ProductDraft(name="Chair", price=800),
        [make_upload(), make_upload(), make_upload()],
    )
    old_files = [asset_file(path) for path in created.asset_paths]

    updated = await service.update_product(created.id, ProductPatch(), [make_upload(), make_upload()])

    assert len(updated.asset_paths) == 2
    assert not set(updated.asset_paths) & set(created.asset_paths)
    assert all(not path.exists() for path in old_files)
    assert all(asset_file(path).is_file() for path in updated.asset_paths)


async def test_update_without_uploads_keeps_assets(service: ProductService, make_upload, asset_file) -> None:
    created = await service.create_product(ProductDraft(name="Chair", price=800), [make_upload()])

    updated = await service.update_product(created.id, ProductPatch(price=750, description="Discounted"))

    assert updated.price == 750
    assert updated.description == "Discounted"
    assert updated.name == "Chair"
    assert updated.asset_paths == created.asset_paths
    assert asset_file(created.asset_paths[0]).is_file()


async def test_update_can_clear_description(service: ProductService) -> None:
    created = await service.create_product(ProductDraft(name="Chair", price=800, description="Old"))

    updated = await service.update_product(created.id, ProductPatch(description=None))

    assert updated.description is None


async def test_update_failure_removes_new_files(service: ProductService, make_upload, asset_file) -> None:
    created = await service.create_product(ProductDraft(name="Desk", price=3000), [make_upload(), make_upload()])
    old_files = [asset_file(path) for path in created.asset_paths]
    new_uploads = [make_upload(), make_upload()]

    result = await service.update_product(created.id, ProductPatch(price=-10), new_uploads)

    assert isinstance(result, ProductStorageError)
    assert all(not Path(upload.temp_path).exists() for upload in new_uploads)
    # Old files were deleted before the write was attempted and are not restored.
    assert all(not path.exists() for path in old_files)
    current = await service.get_product(created.id)
    assert current.asset_paths == created.asset_paths
    assert current.price == 3000


@pytest.mark.parametrize("product_id", ["not-a-valid-id-format", str(uuid.uuid4())])
async def test_update_unknown_product_discards_uploads(service: ProductService, make_upload, product_id) -> None:
    upload = make_upload()

    result = await service.update_product(product_id, ProductPatch(name="X"), [upload])

    assert isinstance(result, ProductNotFoundError)
    assert result.client_fault
    assert not Path(upload.temp_path).exists()


async def test_remove_deletes_files_and_record(service: ProductService, make_upload, asset_file) -> None:
    created = await service.create_product(ProductDraft(name="Sofa", price=6000), [make_upload(), make_upload()])

    removed = await service.remove_product(created.id)

    assert removed.id == created.id
    assert removed.asset_paths == created.asset_paths
    assert all(not asset_file(path).exists() for path in created.asset_paths)
    assert isinstance(await service.get_product(created.id), ProductNotFoundError)


async def test_remove_tolerates_missing_files(service: ProductService, make_upload, asset_file) -> None:
    created = await service.create_product(ProductDraft(name="Sofa", price=6000), [make_upload(), make_upload()])
    asset_file(created.asset_paths[0]).unlink()

    removed = await service.remove_product(created.id)

    assert removed.id == created.id
    assert isinstance(await service.get_product(created.id), ProductNotFoundError)


@pytest.mark.parametrize("product_id", ["not-a-valid-id-format", str(uuid.uuid4())])
async def test_remove_unknown_product(service: ProductService, product_id: str) -> None:
    assert isinstance(await service.remove_product(product_id), ProductNotFoundError)


@pytest.mark.parametrize("product_id", ["not-a-valid-id-format", str(uuid.uuid4())])
async def test_get_unknown_product_is_not_found(service: ProductService, product_id: str) -> None:
    assert isinstance(await service.get_product(product_id), ProductNotFoundError)


async def test_list_filters_by_price_range(service: ProductService) -> None:
    for price in (500, 1000, 3000, 5000, 6000):
        await service.create_product(ProductDraft(name=f"Product {price}", price=price))

    products = [product async for product in service.list_products({"minPrice": "1000", "maxPrice": "5000"})]

    assert [product.price for product in products] == [1000, 3000, 5000]


async def test_list_accepts_sort_aliases(service: ProductService) -> None:
    for name in ("banana", "apple", "cherry"):
        await service.create_product(ProductDraft(name=name, price=1))

    products = [product async for product in service.list_products({"sort": "name", "order": "desc", "name": ""})]

    assert [product.name for product in products] == ["cherry", "banana", "apple"]


@pytest.mark.parametrize(
    "query",
    [
        {"minPrice": "cheap"},
        {"minPrice": 10, "maxPrice": 5},
        {"sort": "colors"},
        {"order": "sideways"},
        {"page": 2},
    ],
)
async def test_list_rejects_malformed_queries(service: ProductService, query) -> None:
    result = service.list_products(query)
    assert isinstance(result, ProductValidationError)
    assert result.client_fault


async def test_remove_deletes_files_when_root_name_repeats_above_it(repository, tmp_path: Path) -> None:
    root = tmp_path / "uploads" / "shop" / "uploads"
    (root / "products").mkdir(parents=True)
    files = [root / "products" / f"{index}.jpg" for index in range(2)]
    for path in files:
        path.write_bytes(b"x")
    service = ProductService(repository, LocalAssetStore(root))
    uploads = [UploadedAsset(temp_path=str(path), size_bytes=1) for path in files]

    created = await service.create_product(ProductDraft(name="Rug", price=40), uploads)
    assert created.asset_paths == ["uploads/products/0.jpg", "uploads/products/1.jpg"]

    await service.remove_product(created.id)

    assert all(not path.exists() for path in files)
