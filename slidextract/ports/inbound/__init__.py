from slidextract.ports.inbound.extract_slides_use_case import ExtractSlidesUseCase, SlidePipeline

__all__ = ["ExtractSlidesUseCase", "SlidePipeline"]
