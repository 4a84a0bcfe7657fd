from catalog.models.video_record import VideoRecord

__all__ = ["VideoRecord"]
