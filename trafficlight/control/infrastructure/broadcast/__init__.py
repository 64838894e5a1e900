from .state_broadcaster import StateBroadcaster
