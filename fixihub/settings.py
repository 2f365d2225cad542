import os


def _optional_float(value: str | None) -> float | None:
    if value is None or value.strip() == "":
        return None
    return float(value)


class Settings:
    def __init__(self):
        self.host = os.environ.get("HOST", "0.0.0.0")
        self.port = int(os.environ.get("PORT", 3000))
        self.debug = os.environ.get("DEBUG", "false").lower() == "true"
        self.static_dir = os.environ.get("FIXI_STATIC_DIR", "public")

        # 0 disables keep-alive comments
        self.heartbeat_interval = (
            float(os.environ.get("FIXI_HEARTBEAT_INTERVAL", 30)) or None
        )
        # 0 keeps per-connection queues unbounded
        self.sink_queue_size = int(os.environ.get("FIXI_SINK_QUEUE_SIZE", 0))
        self.write_timeout = _optional_float(os.environ.get("FIXI_WRITE_TIMEOUT"))
        self.timeline_cache_size = int(os.environ.get("FIXI_TIMELINE_CACHE_SIZE", 50))

        self.mqtt_broker = os.environ.get("MQTT_BROKER")
        self.mqtt_port = int(os.environ.get("MQTT_PORT", 1883))
        self.mqtt_username = os.environ.get("MQTT_USERNAME")
        self.mqtt_password = os.environ.get("MQTT_PASSWORD")
        self.mqtt_feed_topic = os.environ.get("MQTT_FEED_TOPIC", "/timeline")
