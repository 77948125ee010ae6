from slidextract.core.entities.frame import Frame
from slidextract.core.entities.retained_slide import RetainedSlide
from slidextract.core.entities.video_job import VideoJob

__all__ = ["Frame", "RetainedSlide", "VideoJob"]
