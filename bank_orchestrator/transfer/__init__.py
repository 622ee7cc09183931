from .submitter import TransferSubmitter  # noqa: F401
