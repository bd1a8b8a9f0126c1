"""Progress reporting for batch submissions."""

from tqdm.auto import tqdm


def submission_progress(total: int, disable: bool = False) -> tqdm:
    """Return a progress bar counting submitted documents.

    The bar writes to stderr so that per-document status lines on stdout stay
    machine readable.
    """
    return tqdm(
        total=total,
        desc="Submitting documents",
        unit="doc",
        dynamic_ncols=True,
        mininterval=0.1,
        leave=False,
        disable=disable,
    )
