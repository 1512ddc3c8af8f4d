"""FlappyGate game entities."""
from games.FlappyGate.game.entities.actor import Actor, ActorConfig
from games.FlappyGate.game.entities.obstacle import Obstacle

__all__ = ['Actor', 'ActorConfig', 'Obstacle']
