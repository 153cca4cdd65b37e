"""Basic smoke tests for the package.

Quick sanity checks that the public API imports and works end to end.
"""

import pytest

import cloud_trace_context
from cloud_trace_context import publish, resolve


def test_version_exposed():
    """Smoke test: version is accessible."""
    assert hasattr(cloud_trace_context, "__version__")
    assert isinstance(cloud_trace_context.__version__, str)
    assert len(cloud_trace_context.__version__) > 0


def test_resolve_and_publish():
    """Smoke test: a generated context publishes a well-formed header."""
    ctx = resolve(None).unwrap()
    publication = publish(ctx, "x-cloud-trace-context", "my-project")
    assert publication.header_value == f"{ctx.trace_id}/{ctx.span_id};o=0"
    assert publication.log_fields.trace == f"projects/my-project/traces/{ctx.trace_id}"


def test_default_sampling_policy():
    """Smoke test: the default policy never samples new traces."""
    from cloud_trace_context import DEFAULT_SAMPLING_POLICY, FixedSamplingPolicy

    assert DEFAULT_SAMPLING_POLICY.decide() == "0"
    assert FixedSamplingPolicy("1").decide() == "1"
    with pytest.raises(ValueError):
        FixedSamplingPolicy("yes")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
