# MIT License © 2025 Motohiro Suzuki
