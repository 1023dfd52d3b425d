"""
Commands for the subnet-bridge CLI.

- nft:    register-nft, deposit-nft, withdraw-nft-l2, verify
- ft:     register-ft, deposit-ft, withdraw-ft-l2, ft-balance
- common: options, nonce policy, submit / query runners
"""
