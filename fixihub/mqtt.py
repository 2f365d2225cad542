import logging

from paho.mqtt import client as mqtt_client

from .settings import Settings

logger = logging.getLogger(__name__)


class MQTTResource:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.client: mqtt_client.Client | None = None

    def connect(self) -> bool:
        if self.client is not None:
            return True

        broker = self.settings.mqtt_broker
        if not broker:
            logger.info("There is no MQTT_BROKER env var, timeline feed disabled")
            return False
        port = self.settings.mqtt_port

        if port == 443:
            # public brokers are reached over TLS websockets
            self.client = mqtt_client.Client(
                mqtt_client.CallbackAPIVersion.VERSION2, transport="websockets"
            )
            self.client.tls_set(cert_reqs=mqtt_client.ssl.CERT_REQUIRED)
        else:
            self.client = mqtt_client.Client(mqtt_client.CallbackAPIVersion.VERSION2)

        def on_connect(client, userdata, flags, reason_code, properties):
            if reason_code.is_failure:
                logger.error("Failed to connect to MQTT broker: %s", reason_code)
            else:
                logger.info("Connected to MQTT broker %s:%d", broker, port)

        self.client.on_connect = on_connect
        username, password = self.settings.mqtt_username, self.settings.mqtt_password
        if username and password:
            self.client.username_pw_set(username, password)
        self.client.connect(broker, port)
        self.client.loop_start()
        logger.info("MQTT client connected and loop started")
        return True

    def disconnect(self):
        if self.client is not None:
            self.client.loop_stop()
            self.client.disconnect()
            self.client = None
            logger.info("MQTT client disconnected")

    def get_client(self) -> mqtt_client.Client:
        if self.client is None:
            raise RuntimeError("MQTT client is not initialized")
        return self.client
