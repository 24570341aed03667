"""Unit tests for error_responses and resource error mapping."""

from crosscut_admin.application.resource_errors import (
    InvalidResourcePayloadError,
    ResourceNotFoundError,
    UnknownResourceError,
    UnsupportedOperationError,
)
from crosscut_admin.crosscutting.error_responses import (
    ErrorCode,
    ErrorDetail,
    internal_error,
    not_found,
    unsupported_operation,
    upstream_error,
    validation_error,
)
from crosscut_admin.interfaces.api.http.error_mapping import to_http_exception


class TestErrorFactories:
    """Test error factory functions."""

    def test_validation_error(self):
        exc = validation_error("Invalid input", [{"field": "name", "msg": "required"}])
        assert exc.status_code == 422
        assert exc.code == ErrorCode.VALIDATION_ERROR
        assert exc.errors == [{"field": "name", "msg": "required"}]

    def test_not_found(self):
        exc = not_found("Workflow", "wf-123")
        assert exc.status_code == 404
        assert exc.code == ErrorCode.NOT_FOUND
        assert "wf-123" in exc.detail

    def test_unsupported_operation(self):
        exc = unsupported_operation("Update not supported")
        assert exc.status_code == 405
        assert exc.code == ErrorCode.UNSUPPORTED_OPERATION

    def test_upstream_error(self):
        exc = upstream_error("BPO down")
        assert exc.status_code == 502
        assert exc.code == ErrorCode.UPSTREAM_ERROR

    def test_internal_error(self):
        exc = internal_error()
        assert exc.status_code == 500
        assert exc.code == ErrorCode.INTERNAL_ERROR


class TestResourceErrorMapping:
    def test_not_found(self):
        exc = to_http_exception(ResourceNotFoundError("Workflow", "wf-9"))
        assert exc.status_code == 404
        assert "wf-9" in exc.detail

    def test_unsupported(self):
        exc = to_http_exception(UnsupportedOperationError("Delete", "audit"))
        assert exc.status_code == 405
        assert exc.detail == "Delete not supported for resource: audit"

    def test_invalid_payload_carries_field(self):
        exc = to_http_exception(
            InvalidResourcePayloadError("product_name is required", field="product_name")
        )
        assert exc.status_code == 422
        assert exc.errors == [{"field": "product_name"}]

    def test_unknown_resource(self):
        exc = to_http_exception(UnknownResourceError("invoices"))
        assert exc.status_code == 422
        assert exc.errors == [{"field": "collection", "value": "invoices"}]


class TestErrorDetail:
    """Test ErrorDetail model."""

    def test_serialization(self):
        detail = ErrorDetail(
            title="Not Found",
            status=404,
            detail="Resource not found",
            code=ErrorCode.NOT_FOUND,
        )
        data = detail.model_dump(exclude_none=True)
        assert data["status"] == 404
        assert data["code"] == "NOT_FOUND"
        assert "errors" not in data  # excluded when None
