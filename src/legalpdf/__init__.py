"""
legalpdf: signature block parsing and page layout for generated legal documents.

Pipeline:
    raw text -> markers -> block bodies -> layout class -> parties
             -> SignatureBlockData -> LayoutBlocks -> LayoutPlan
"""

__version__ = "0.1.0"
