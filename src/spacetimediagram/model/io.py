"""
Input/Output Manager (HDF5)
Handles saving and loading the DiagramState to .diagram (HDF5) files.
"""
import json
import logging
from importlib.metadata import version, PackageNotFoundError
from typing import Any, Dict, List, Optional

import h5py
import numpy as np

from spacetimediagram.model.entities import SpacetimeEntity, entity_from_dict
from spacetimediagram.model.relativity import SpeedOfLight, validate_observer_beta
from spacetimediagram.model.state import DiagramState

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("spacetime-diagram")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

# Incremented by one whenever the layout of the file changes
FILE_VERSION = 1

# HDF5 attributes are limited to 64KB
_MAX_ATTR_BYTES = 60000


class IOManager:

    @staticmethod
    def save_diagram(state: DiagramState, filepath: str) -> None:
        logger.info(f"Saving diagram to: {filepath}")
        try:
            with h5py.File(filepath, "w") as f:
                f.attrs["file_version"] = FILE_VERSION
                f.attrs["version"] = APP_VERSION
                f.attrs["project_name"] = state.project_name

                # --- 1. SAVE OBJECTS ---
                grp_obj = f.create_group("objects")
                grp_obj.attrs["count"] = len(state.objects)
                objects_json = json.dumps([obj.to_dict() for obj in state.objects])

                # Use dataset if data exceeds HDF5 attribute size limit
                if len(objects_json) > _MAX_ATTR_BYTES:
                    logger.info(f"Object list is large ({len(objects_json)} bytes), using dataset")
                    grp_obj.create_dataset("objects_blob", data=np.void(objects_json.encode('utf-8')))
                else:
                    grp_obj.attrs["objects_json"] = objects_json

                # --- 2. SAVE VIEW SETTINGS ---
                grp_view = f.create_group("view_settings")
                grp_view.attrs["observer_beta"] = state.observer_beta
                grp_view.attrs["speed_of_light"] = state.speed_of_light.name
                grp_view.attrs["draw_light_cone"] = state.draw_light_cone
                grp_view.attrs["draw_labels"] = state.draw_labels

            logger.info(f"Diagram saved to: {filepath}")

        except Exception as e:
            logger.exception(f"Failed to save diagram: {e}")
            raise e

    @staticmethod
    def load_diagram(state: DiagramState, filepath: str) -> None:
        logger.info(f"Loading diagram from: {filepath}")
        if not h5py.is_hdf5(filepath):
            msg = f"File '{filepath}' is not a valid diagram file."
            logger.error(msg)
            raise ValueError(msg)

        try:
            with h5py.File(filepath, "r") as f:
                file_version = IOManager._native(f.attrs.get("file_version", -1))
                if file_version != FILE_VERSION:
                    msg = f"Unsupported diagram file version {file_version} (expected {FILE_VERSION})."
                    logger.error(msg)
                    raise ValueError(msg)

                # Parse and validate everything before touching the state so a
                # bad file leaves the open diagram intact
                objects = IOManager._read_objects(f)
                settings = IOManager._read_view_settings(f)
                project_name = None
                if "project_name" in f.attrs:
                    project_name = str(IOManager._native(f.attrs["project_name"]))

                # reset the state to clear existing data
                state.reset()

                if project_name is not None:
                    state.project_name = project_name

                state.replace_objects(objects)
                logger.debug(f"Loaded {len(objects)} spacetime objects.")

                # --- APPLY VIEW SETTINGS ---
                if "speed_of_light" in settings:
                    state.set_speed_of_light(settings["speed_of_light"])
                if "observer_beta" in settings:
                    state.set_observer_beta(settings["observer_beta"])
                state.draw_light_cone = settings.get("draw_light_cone", state.draw_light_cone)
                state.draw_labels = settings.get("draw_labels", state.draw_labels)

            logger.info(f"Diagram loaded from: {filepath}")

        except Exception as e:
            logger.exception(f"Failed to load diagram: {e}")
            raise e

    # --- HELPERS ---

    @staticmethod
    def _read_objects(h5_file: h5py.File) -> List[SpacetimeEntity]:
        if "objects" not in h5_file:
            logger.warning("No objects group found in diagram file.")
            return []

        grp_obj = h5_file["objects"]
        objects_json: Optional[str] = None
        if "objects_blob" in grp_obj:
            # Large data stored as dataset
            objects_json = bytes(grp_obj["objects_blob"][()]).decode('utf-8')
        elif "objects_json" in grp_obj.attrs:
            # Small data stored as attribute
            objects_json = str(IOManager._native(grp_obj.attrs["objects_json"]))

        if not objects_json:
            return []

        try:
            return [entity_from_dict(data) for data in json.loads(objects_json)]
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed spacetime object in diagram file: {e!r}") from e

    @staticmethod
    def _read_view_settings(h5_file: h5py.File) -> Dict[str, Any]:
        """Read and validate the display options without applying them."""
        settings: Dict[str, Any] = {}
        if "view_settings" not in h5_file:
            return settings

        attrs = h5_file["view_settings"].attrs
        if "speed_of_light" in attrs:
            name = str(IOManager._native(attrs["speed_of_light"]))
            try:
                settings["speed_of_light"] = SpeedOfLight[name]
            except KeyError:
                raise ValueError(f"Unknown speed of light '{name}' in diagram file.") from None
        if "observer_beta" in attrs:
            # InvalidObserverFrameError is a ValueError
            settings["observer_beta"] = validate_observer_beta(float(attrs["observer_beta"]))
        if "draw_light_cone" in attrs:
            settings["draw_light_cone"] = bool(attrs["draw_light_cone"])
        if "draw_labels" in attrs:
            settings["draw_labels"] = bool(attrs["draw_labels"])
        return settings

    @staticmethod
    def _native(val: Any) -> Any:
        """HDF5 often returns numpy types or bytes, convert to native python."""
        if isinstance(val, bytes):
            return val.decode('utf-8')
        if hasattr(val, 'item'):
            return val.item()
        return val
