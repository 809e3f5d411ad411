"""Sample input for trying the pipeline by hand."""

from __future__ import annotations

import tempfile
from pathlib import Path

from .config import NoirDocConfig
from .orchestrator import BuildResult, Orchestrator

SAMPLE_FILENAME = "test_noir_file.nr"

SAMPLE_SOURCE = '''// typedoc: true
use dep::aztec::context::{PrivateContext, PublicContext};
use dep::aztec::protocol_types::{address::AztecAddress, abis::function_selector::FunctionSelector, hash::pedersen_hash};

use crate::entrypoint::{app::AppPayload, fee::FeePayload};
use crate::auth::{IS_VALID_SELECTOR, compute_authwit_message_hash};

struct AccountActions<Context> {
    context: Context,
    is_valid_impl: fn(&mut PrivateContext, Field) -> bool,
}

impl<Context> AccountActions<Context> {
    pub fn init(context: Context, is_valid_impl: fn(&mut PrivateContext, Field) -> bool) -> Self {
        AccountActions { context, is_valid_impl }
    }
}

/**
 * An implementation of the Account Action struct for the private context.
 *
 * Implements logic to verify authorization and execute payloads.
 */
impl AccountActions<&mut PrivateContext> {

    /**
     * Verifies that the `app_hash` and `fee_hash` are authorized and then executes them.
     *
     * Executes the `fee_payload` and `app_payload` in sequence.
     * Will execute the `fee_payload` as part of the setup, and then enter the app phase.
     *
     * @param app_payload The payload that contains the calls to be executed in the app phase.
     * @param fee_payload The payload that contains the calls to be executed in the setup phase.
     */
    // docs:start:entrypoint
    pub fn entrypoint(self, app_payload: AppPayload, fee_payload: FeePayload) {
        let valid_fn = self.is_valid_impl;

        let fee_hash = fee_payload.hash();
        assert(valid_fn(self.context, fee_hash));
        fee_payload.execute_calls(self.context);
        self.context.end_setup();

        let app_hash = app_payload.hash();
        assert(valid_fn(self.context, app_hash));
        app_payload.execute_calls(self.context);
    }
    // docs:end:entrypoint

    /**
     * Verifies that the `msg_sender` is authorized to consume `inner_hash` by the account.
     *
     * Computes the `message_hash` using the `msg_sender`, `chain_id`, `version` and `inner_hash`.
     * Then executes the `is_valid_impl` function to verify that the message is authorized.
     *
     * Will revert if the message is not authorized.
     *
     * @param inner_hash The hash of the message that the `msg_sender` is trying to consume.
     */
    // docs:start:verify_private_authwit
    pub fn verify_private_authwit(self, inner_hash: Field) -> Field {
        let message_hash = compute_authwit_message_hash(
            self.context.msg_sender(),
            self.context.chain_id(),
            self.context.version(),
            inner_hash
        );
        let valid_fn = self.is_valid_impl;
        assert(valid_fn(self.context, message_hash) == true, "Message not authorized by account");
        IS_VALID_SELECTOR
    }
    // docs:end:verify_private_authwit
}
'''


def run_demo(output_dir: Path, orchestrator: Orchestrator | None = None) -> BuildResult:
    """Write the sample file to a throwaway directory and document it into ``output_dir``."""
    orchestrator = orchestrator or Orchestrator()
    with tempfile.TemporaryDirectory(prefix="noirdoc-demo-") as tmp:
        input_dir = Path(tmp)
        (input_dir / SAMPLE_FILENAME).write_text(SAMPLE_SOURCE, encoding="utf-8")
        config = NoirDocConfig(root=input_dir.resolve(), fail_fast=True)
        return orchestrator.run(input_dir, output_dir, config=config)


__all__ = ["SAMPLE_FILENAME", "SAMPLE_SOURCE", "run_demo"]
