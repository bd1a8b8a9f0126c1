"""Document schema accepted by the ``/lk/documents/create`` endpoint."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Description(BaseModel):
    """Document description block.

    Unlike the rest of the document, the registry expects this block's
    fields in lowerCamelCase (``participantInn``).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    participant_inn: str | None = None


class Product(BaseModel):
    """A single product line of a document."""

    certificate_document: str | None = None
    certificate_document_date: date | None = None
    certificate_document_number: str | None = None
    owner_inn: str | None = None
    producer_inn: str | None = None
    production_date: date | None = None
    tnved_code: str | None = None
    uit_code: str | None = None
    uitu_code: str | None = None


class Document(BaseModel):
    """Goods introduction document submitted to the registry."""

    description: Description | None = None
    doc_id: str | None = None
    doc_status: str | None = None
    doc_type: str | None = None
    import_request: bool = False
    owner_inn: str | None = None
    participant_inn: str | None = None
    producer_inn: str | None = None
    production_date: date | None = None
    production_type: str | None = None
    products: list[Product] = Field(default_factory=list)
    reg_date: date | None = None
    reg_number: str | None = None


def sample_document() -> Document:
    """Return the example LP_INTRODUCE_GOODS document with placeholder values."""

    sample_date = date(2020, 1, 23)
    product = Product(
        certificate_document="string",
        certificate_document_date=sample_date,
        certificate_document_number="string",
        owner_inn="string",
        producer_inn="string",
        production_date=sample_date,
        tnved_code="string",
        uit_code="string",
        uitu_code="string",
    )
    return Document(
        description=Description(participant_inn="string"),
        doc_id="string",
        doc_status="string",
        doc_type="LP_INTRODUCE_GOODS",
        import_request=True,
        owner_inn="string",
        participant_inn="string",
        producer_inn="string",
        production_date=sample_date,
        production_type="string",
        products=[product],
        reg_date=sample_date,
        reg_number="string",
    )
