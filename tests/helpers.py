"""Message builders shared by the test suite."""

from a2ui.protocol.catalog import STANDARD_CATALOG_ID


def create_surface(surface_id="main", catalog_id=STANDARD_CATALOG_ID):
    return {"createSurface": {"surfaceId": surface_id, "catalogId": catalog_id}}


def update_components(components, surface_id="main"):
    return {"updateComponents": {"surfaceId": surface_id, "components": components}}


def update_data(value, path="/", surface_id="main", **extra):
    return {"updateDataModel": {"surfaceId": surface_id, "path": path, "value": value, **extra}}


def remove_data(path, surface_id="main"):
    return {"updateDataModel": {"surfaceId": surface_id, "path": path, "op": "remove"}}


def delete_surface(surface_id="main"):
    return {"deleteSurface": {"surfaceId": surface_id}}


def surface(components, data=None, surface_id="main"):
    """A batch creating one surface with components and (optionally) data."""
    batch = [create_surface(surface_id)]
    if data is not None:
        batch.append(update_data(data, surface_id=surface_id))
    batch.append(update_components(components, surface_id=surface_id))
    return batch
