#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/__init__.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

from .math_utils import Vec3, Quaternion, Mat4
from .color import Color, parse_hex_color
from .config import EngineConfig
from .errors import (SceneMutatorError, EmptyScript, ExecutionError, ScriptRejected,
                     InvalidParent, CorruptChain, UnknownState, BusyError)
from .scene import Scene
from .camera import PerspectiveCamera
from .controls import OrbitControls
from .renderer import Renderer
from .sandbox import ScriptSandbox, UPDATE_KEY
from .view_state import ViewState
from .versions import VersionNode, VersionTree
from .frame_driver import Clock, FrameUpdateDriver
from .stage import Stage
from .extraction import extract_script, strip_script_blocks
from .controller import MutationController, SubmitResult, RevertAction, ConversationEntry
