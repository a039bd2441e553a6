"""Locates and reads proof (.proof) and public witness (.pw) files."""

from pathlib import Path
from typing import Optional, Tuple

from ..analysis.models import ProofArtifact

PROOF_EXTENSION = "proof"
WITNESS_EXTENSION = "pw"

SKIP_DIRS = {"node_modules"}


def _search(directory: Path, extension: str) -> Optional[Path]:
    try:
        entries = sorted(directory.iterdir())
    except OSError:
        return None

    for entry in entries:
        if entry.is_file() and entry.suffix == f".{extension}":
            return entry

    for entry in entries:
        if entry.is_dir() and not entry.name.startswith(".") and entry.name not in SKIP_DIRS:
            found = _search(entry, extension)
            if found:
                return found
    return None


def find_file_by_extension(root: Path, extension: str) -> Path:
    """
    Find the first file with an extension under root.

    Files directly in a directory win over files in its subdirectories.
    Hidden directories and node_modules are skipped.

    Raises:
        FileNotFoundError: If no such file exists
    """
    found = _search(Path(root), extension)
    if not found:
        raise FileNotFoundError(
            f"Could not find file with extension .{extension} under {root}"
        )
    return found


def read_proof_files(root: Path) -> Tuple[ProofArtifact, Path, Path]:
    """
    Find and read the proof and witness files of a project.

    Args:
        root: Project directory

    Returns:
        (ProofArtifact, proof_path, witness_path)
    """
    proof_path = find_file_by_extension(root, PROOF_EXTENSION)
    witness_path = find_file_by_extension(root, WITNESS_EXTENSION)

    artifact = ProofArtifact(
        proof=proof_path.read_bytes(),
        witness=witness_path.read_bytes(),
    )
    return artifact, proof_path, witness_path
