from vrscene.logger.scene_logger import write_log, capture_log, init, log_settings

__all__ = ["write_log", "capture_log", "init", "log_settings"]
