"""Shared model-to-response serializers."""

from brandbook.db.models import Client, ClientVersion, DocumentImport
from brandbook.schemas import (
    ApplyFieldsResponse,
    ClientResponse,
    ClientSummaryResponse,
    FieldResultResponse,
    FieldSectionResponse,
    FlatFieldResponse,
    ImportResponse,
    ReviewFieldsResponse,
    VersionResponse,
)
from brandbook.services.imports.flattener import format_value
from brandbook.services.imports.pipeline import ApplyOutcome, ReviewSection


def client_to_summary(client: Client) -> ClientSummaryResponse:
    return ClientSummaryResponse(
        id=client.id,
        client_name=client.client_name,
        industry=client.industry,
        current_version=client.current_version,
        updated_at=client.updated_at,
    )


def client_to_response(client: Client) -> ClientResponse:
    """Map Client model to ClientResponse (includes the full data document)."""
    return ClientResponse(
        id=client.id,
        client_name=client.client_name,
        industry=client.industry,
        current_version=client.current_version,
        updated_at=client.updated_at,
        data=client.data or {},
        created_at=client.created_at,
        created_by=client.created_by,
        updated_by=client.updated_by,
    )


def version_to_response(version: ClientVersion) -> VersionResponse:
    return VersionResponse(
        id=version.id,
        client_id=version.client_id,
        version_number=version.version_number,
        version_name=version.version_name,
        description=version.description,
        data=version.data or {},
        created_at=version.created_at,
        created_by=version.created_by,
    )


def import_to_response(record: DocumentImport) -> ImportResponse:
    """Map DocumentImport model to ImportResponse."""
    return ImportResponse(
        id=record.id,
        client_id=record.client_id,
        filename=record.filename,
        file_id=record.file_id,
        file_type=record.file_type,
        source_url=record.source_url,
        extracted_text=record.extracted_text,
        target_sections=record.target_sections,
        extracted_fields=record.extracted_fields,
        status=record.status,
        error_message=record.error_message,
        created_at=record.created_at,
        created_by=record.created_by,
        applied_at=record.applied_at,
        applied_by=record.applied_by,
    )


def review_to_response(record: DocumentImport, sections: list[ReviewSection]) -> ReviewFieldsResponse:
    return ReviewFieldsResponse(
        import_id=record.id,
        status=record.status,
        total=sum(len(s.fields) for s in sections),
        sections=[
            FieldSectionResponse(
                section=s.section,
                label=s.label,
                fields=[
                    FlatFieldResponse(
                        path=f.path,
                        label=f.label,
                        value=f.value,
                        section=f.section,
                        display=format_value(f.value),
                    )
                    for f in s.fields
                ],
            )
            for s in sections
        ],
    )


def apply_outcome_to_response(outcome: ApplyOutcome) -> ApplyFieldsResponse:
    return ApplyFieldsResponse(
        import_id=outcome.record.id,
        status=outcome.record.status,
        applied_count=outcome.merge.applied_count,
        results=[
            FieldResultResponse(
                path=r.path,
                applied=r.applied,
                reason=r.reason,
                warnings=list(r.warnings),
            )
            for r in outcome.merge.results
        ],
    )
