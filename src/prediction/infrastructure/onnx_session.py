from typing import Any, Dict, List, Optional

import onnxruntime as ort

class OnnxModelSession:
    """
    Thin adapter exposing an onnxruntime InferenceSession as a ModelSession.
    """
    def __init__(self, session: ort.InferenceSession):
        self._session = session
        self._input_names = [i.name for i in session.get_inputs()]
        self._output_names = [o.name for o in session.get_outputs()]

    @property
    def input_names(self) -> List[str]:
        return self._input_names

    @property
    def output_names(self) -> List[str]:
        return self._output_names

    def run(self, output_names: Optional[List[str]], feeds: Dict[str, Any]) -> List[Any]:
        return self._session.run(output_names, feeds)


class OnnxSessionFactory:
    """
    Builds CPU inference sessions from in-memory ONNX models.
    """
    def __init__(self, intra_op_num_threads: int = 1):
        self.intra_op_num_threads = intra_op_num_threads

    def create(self, model_bytes: bytes) -> OnnxModelSession:
        options = ort.SessionOptions()
        options.intra_op_num_threads = self.intra_op_num_threads
        options.inter_op_num_threads = 1
        session = ort.InferenceSession(
            model_bytes,
            sess_options=options,
            providers=["CPUExecutionProvider"]
        )
        return OnnxModelSession(session)
