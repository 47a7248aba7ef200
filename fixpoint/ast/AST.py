import inspect
import typing as tp

from fixpoint.numtypes.RuntimeTypes import RuntimeType
from fixpoint.numtypes.StaticTypes import BoolT, StaticType
from fixpoint.utils.utils import max_abs_error


class Primitive:
    """An operation given as three views of the same computation.

    impl -- bit-exact integer implementation over RuntimeType values
    sign -- signature over StaticType values; raises TypeError on mismatch
    spec -- real-valued semantics over the to_spec() images of the arguments

    Calling a primitive type-checks the arguments against sign, runs impl and
    checks that the output has the type sign promised. Keyword arguments are
    parameters of impl only (e.g. an iteration count) and are neither typed nor
    seen by spec.
    """
    def __init__(self, spec: tp.Callable[..., tp.Any],
                       impl: tp.Callable[..., tp.Any],
                       sign: tp.Callable[..., StaticType],
                       name: str):
        # Checks that signature's annotations are StaticType
        self._primitive_signature_check(sign)
        self.spec = spec
        self.impl = impl
        self.sign = sign
        self.name = name
        self._params = list(inspect.signature(sign).parameters.values())

    ############## PRIVATE METHODS ###############

    def _primitive_signature_check(self, sign):
        sign = inspect.signature(sign)
        err_msg = (
            f"Signature contain types that are not an instance of StaticType!\n"
            f"Given: {sign}\n"
        )
        for param in sign.parameters.values():
            assert issubclass(param.annotation, StaticType), err_msg
        assert issubclass(sign.return_annotation, StaticType), err_msg

    def _static_typecheck(self, args: tuple) -> StaticType:
        if len(args) != len(self._params):
            raise TypeError(f"{self.name} takes {len(self._params)} arguments, {len(args)} given")
        args_types = []
        for param, arg in zip(self._params, args):
            if not isinstance(arg, RuntimeType):
                raise TypeError(f"Argument {param.name} to {self.name} is not a RuntimeType: {arg!r}")
            arg_type = arg.static_type()
            if not isinstance(arg_type, param.annotation):
                raise TypeError(
                    f"Arguments to {self.name} do not match its signature\n"
                    f"Given: {param.name}={arg_type}\n"
                    f"Required: {param.annotation.__name__}"
                )
            args_types.append(arg_type)
        return self.sign(*args_types)

    def _dynamic_typecheck(self, out, node_type: StaticType):
        out_type = BoolT() if isinstance(out, bool) else out.static_type()
        err_msg = (
            f"Output does not match {self.name}'s signature:\n"
            f"  impl: {out}\n"
            f"  impl-type: {out_type}\n"
            f"  expected-type: {node_type}\n"
        )
        assert out_type == node_type, err_msg

    ################ PUBLIC API ##################

    def __call__(self, *args: RuntimeType, **params):
        node_type = self._static_typecheck(args)
        out = self.impl(*args, **params)
        self._dynamic_typecheck(out, node_type)
        return out

    def reference(self, *args: RuntimeType):
        """Evaluates spec on the real values of args."""
        return self.spec(*[x.to_spec() for x in args])

    def spec_error(self, *args: RuntimeType, **params) -> float:
        """Absolute deviation of impl from spec on args (max over components)."""
        out = self(*args, **params)
        out = out if isinstance(out, bool) else out.to_spec()
        return max_abs_error(out, self.reference(*args))

    def __repr__(self):
        return f"{self.name} [Primitive]"
