import json
import logging
from typing import Any, Dict, Protocol

import pika
import pika.exceptions

logger = logging.getLogger(__name__)

USER_REGISTERED = "user.registered"
TASK_CREATED = "task.created"
TASK_UPDATED = "task.updated"
TASK_DELETED = "task.deleted"


class EventPublisher(Protocol):
    def publish_event(self, event_type: str, data: Dict[str, Any]) -> bool: ...

    def close(self) -> None: ...


class NullPublisher:
    """Publisher used when event publishing is disabled"""

    def publish_event(self, event_type: str, data: Dict[str, Any]) -> bool:
        logger.debug(f"Event publishing disabled, dropping {event_type}")
        return False

    def close(self) -> None:
        pass


class RabbitMQPublisher:
    """RabbitMQ publisher for user and task events"""

    def __init__(self, url: str, exchange: str = "events"):
        self.url = url
        self.exchange = exchange
        self.connection = None
        self.channel = None

    def connect(self) -> bool:
        """Establish connection to RabbitMQ"""
        try:
            parameters = pika.URLParameters(self.url)
            self.connection = pika.BlockingConnection(parameters)
            self.channel = self.connection.channel()

            # Declare exchange
            self.channel.exchange_declare(
                exchange=self.exchange,
                exchange_type="topic",
                durable=True
            )

            logger.info(f"Connected to RabbitMQ exchange '{self.exchange}'")
            return True

        except pika.exceptions.AMQPConnectionError as e:
            logger.warning(f"Could not connect to RabbitMQ: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected error connecting to RabbitMQ: {e}")
            return False

    def publish_event(self, event_type: str, data: Dict[str, Any]) -> bool:
        """Publish event to RabbitMQ, routed by its event type"""
        if not self.connection or self.connection.is_closed:
            if not self.connect():
                logger.warning(f"Failed to publish {event_type} event - no connection")
                return False

        try:
            message = {"event": event_type, "data": data}

            self.channel.basic_publish(
                exchange=self.exchange,
                routing_key=event_type,
                body=json.dumps(message),
                properties=pika.BasicProperties(
                    delivery_mode=2,  # Persistent
                    content_type="application/json"
                )
            )

            logger.info(f"Published {event_type} event to RabbitMQ")
            return True

        except Exception as e:
            logger.error(f"Error publishing {event_type} event: {e}")
            return False

    def close(self) -> None:
        """Close connection"""
        try:
            if self.connection and not self.connection.is_closed:
                self.connection.close()
                logger.info("RabbitMQ connection closed")
        except Exception as e:
            logger.error(f"Error closing connection: {e}")


def create_publisher(settings) -> EventPublisher:
    """Pick the publisher matching the settings"""
    if settings.events_enabled:
        return RabbitMQPublisher(settings.rabbitmq_url, exchange=settings.events_exchange)
    return NullPublisher()
