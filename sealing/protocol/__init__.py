# MIT License © 2025 Motohiro Suzuki
"""
sealing/protocol/

Error taxonomy, failure carrier, service configuration and the sealing
state machine. Import the coordinator from sealing.protocol.sealing
directly (it depends on keysources, which depends on errors here).
"""
