"""
Model artifact files

Artifacts are joblib-serialized dictionaries tagged with a format name. Writes
go to a temporary file in the destination directory which then replaces the
destination, so a reader never sees a partially written artifact.
"""
import logging
import os
import pickle
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

import joblib

from ..exceptions import ArtifactError

logger = logging.getLogger(__name__)


def dump_artifact(payload: Dict[str, Any], path: Union[str, Path], artifact_format: str) -> None:
    """
    Atomically write an artifact, overwriting any previous one

    Args:
        payload: Artifact content
        path: Destination file
        artifact_format: Format tag stored alongside the payload
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    artifact = {"format": artifact_format, **payload}

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    os.close(fd)
    try:
        joblib.dump(artifact, tmp_name)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise

    logger.debug(f"Wrote {artifact_format} artifact to {path}")


def load_artifact(path: Union[str, Path], artifact_format: str) -> Dict[str, Any]:
    """
    Read an artifact written by ``dump_artifact``

    Raises:
        OSError: If the file cannot be read
        ArtifactError: If the file is not an artifact of the expected format
    """
    try:
        artifact = joblib.load(Path(path))
    except (pickle.UnpicklingError, EOFError) as e:
        raise ArtifactError(f"{path} is not a readable artifact: {e}") from e
    if not isinstance(artifact, dict) or artifact.get("format") != artifact_format:
        raise ArtifactError(f"{path} is not a {artifact_format} artifact")
    return artifact
