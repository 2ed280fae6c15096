"""Flat-file encoders."""

from placetopay.invoice.asobancaria2001 import (
    BillingBatch,
    BillingBatchHeader,
    BillingDetail,
    BillingFile,
    BillingHeader,
    CollectionBatch,
    CollectionBatchHeader,
    CollectionDetail,
    CollectionFile,
    CollectionHeader,
    build_billing_file,
    build_collection_file,
)

__all__ = [
    "BillingBatch",
    "BillingBatchHeader",
    "BillingDetail",
    "BillingFile",
    "BillingHeader",
    "CollectionBatch",
    "CollectionBatchHeader",
    "CollectionDetail",
    "CollectionFile",
    "CollectionHeader",
    "build_billing_file",
    "build_collection_file",
]
